"""Subprocess helpers for the git queries.

Commands always run without a shell, with output captured as text and
stripped of terminal escape sequences so tag names and hashes come back
clean even when git is configured with color.
"""

import os
import re
import shlex
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from release_stage.log import get_logger

logger = get_logger("shell")

# CSI sequences (colors, cursor movement), OSC titles and DCS/PM/APC strings
ANSI_PATTERN = re.compile(
    r"\x1b\[[0-9;]*[a-zA-Z]|\x1b\][^\x07]*\x07|\x1b[PX^_][^\x1b]*\x1b\\"
)

# C0 controls except tab, newline and carriage return
CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


class ShellError(Exception):
    """A command exited with a non-zero status or did not finish.

    A command killed after its timeout carries returncode -1 and the
    timeout in seconds.

    Attributes:
        cmd: The command line, joined with spaces
        returncode: Exit status
        stdout: Captured standard output
        stderr: Captured standard error
        timeout: Seconds waited before the command was killed, or None
    """

    def __init__(
        self,
        cmd: str,
        returncode: int,
        stdout: str,
        stderr: str,
        timeout: float | None = None,
    ) -> None:
        super().__init__(cmd, returncode)
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.timeout = timeout

    def __str__(self) -> str:
        if self.timeout is not None:
            lines = [f"'{self.cmd}' timed out after {self.timeout}s"]
        else:
            lines = [f"'{self.cmd}' exited with status {self.returncode}"]
        for label, stream in (("stderr", self.stderr), ("stdout", self.stdout)):
            if stream.strip():
                lines.append(f"{label}: {stream.strip()}")
        return "\n".join(lines)


def strip_ansi(text: str) -> str:
    """Remove escape sequences and stray control characters from text."""
    if not text:
        return ""
    return CONTROL_CHARS_PATTERN.sub("", ANSI_PATTERN.sub("", text))


def run(
    cmd: str | Sequence[str],
    cwd: Path | None = None,
    check: bool = True,
    timeout: int = 30,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command and capture its output.

    Args:
        cmd: Argument list, or a string split with shlex
        cwd: Working directory
        check: Raise ShellError on a non-zero exit status
        timeout: Seconds before the command is killed
        env: Variables added to the current environment

    Returns:
        The completed process; stdout and stderr are cleaned strings

    Raises:
        ShellError: If check is set and the command failed, or the
            command did not finish within timeout (regardless of check)
        FileNotFoundError: If the executable or cwd does not exist
    """
    args = shlex.split(cmd) if isinstance(cmd, str) else list(cmd)
    command_line = " ".join(args)
    logger.debug("Running %s", command_line)

    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            env={**os.environ, **env} if env else None,
        )
    except subprocess.TimeoutExpired as e:
        raise ShellError(
            command_line,
            -1,
            strip_ansi(_as_text(e.stdout)),
            strip_ansi(_as_text(e.stderr)),
            timeout=timeout,
        ) from e
    result.stdout = strip_ansi(result.stdout)
    result.stderr = strip_ansi(result.stderr)

    if check and result.returncode != 0:
        raise ShellError(command_line, result.returncode, result.stdout, result.stderr)
    return result


def _as_text(output: str | bytes | None) -> str:
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output or ""


def is_command_available(cmd: str) -> bool:
    """Check if a command is available in PATH."""
    return shutil.which(cmd) is not None
