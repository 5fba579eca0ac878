"""Git state query operations.

Read-only git operations used to infer versions and detect remotes. All
functions use release_stage.utils.shell.run() and raise GitError when a
command that must succeed fails or git does not answer in time.
"""

import subprocess
from pathlib import Path

from release_stage.exceptions import GitError
from release_stage.utils.shell import ShellError, run


def _query(args: list[str], cwd: Path | None) -> subprocess.CompletedProcess[str]:
    """Run a git command whose exit status is an answer rather than a failure."""
    try:
        return run(["git", *args], cwd=cwd, check=False)
    except ShellError as e:
        raise GitError(
            f"git {args[0]} did not complete",
            details=str(e),
            fix_hint="Check for a stale lock file or a hung credential helper",
        ) from e


def is_git_repository(cwd: Path | None = None) -> bool:
    """Check if the directory is inside a git work tree."""
    try:
        result = _query(["rev-parse", "--is-inside-work-tree"], cwd)
    except (FileNotFoundError, NotADirectoryError):
        return False
    return result.returncode == 0 and result.stdout.strip() == "true"


def has_commits(cwd: Path | None = None) -> bool:
    """Check whether HEAD points at a commit."""
    return _query(["rev-parse", "--verify", "--quiet", "HEAD"], cwd).returncode == 0


def get_remote_urls(cwd: Path | None = None) -> list[tuple[str, str]]:
    """List configured remotes with their fetch URLs.

    Args:
        cwd: Working directory (defaults to current directory)

    Returns:
        List of (remote name, url) in git's listing order

    Raises:
        GitError: If git remote fails
    """
    try:
        result = run(["git", "remote", "-v"], cwd=cwd, check=True)
    except ShellError as e:
        raise GitError(
            "Failed to list git remotes",
            details=str(e),
            fix_hint="Ensure you are in a git repository",
        ) from e

    remotes: list[tuple[str, str]] = []
    seen: set[str] = set()
    for line in result.stdout.splitlines():
        # Format: "<name>\t<url> (fetch)"
        parts = line.split()
        if len(parts) >= 2 and parts[0] not in seen:
            seen.add(parts[0])
            remotes.append((parts[0], parts[1]))
    return remotes


def get_tags(cwd: Path | None = None, points_at: str | None = None) -> list[str]:
    """Get git tags in the repository.

    Args:
        cwd: Working directory (defaults to current directory)
        points_at: Only list tags pointing at this ref (e.g. "HEAD")

    Returns:
        List of tag names, sorted by version (most recent last)

    Raises:
        GitError: If git command fails
    """
    args = ["git", "tag", "--list", "--sort=version:refname"]
    if points_at:
        args.extend(["--points-at", points_at])
    try:
        result = run(args, cwd=cwd, check=True)
    except ShellError as e:
        raise GitError(
            "Failed to list git tags",
            details=str(e),
            fix_hint="Ensure you are in a git repository",
        ) from e
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def get_latest_tag(cwd: Path | None = None) -> str | None:
    """Get the most recent tag reachable from HEAD.

    Uses 'git describe --tags --abbrev=0'.

    Returns:
        Most recent tag name (e.g. "v0.1.0.RELEASE"), or None if there is none
    """
    result = _query(["describe", "--tags", "--abbrev=0"], cwd)
    if result.returncode == 0:
        return result.stdout.strip() or None
    # No tags (or no commits) is not an error
    return None


def get_short_sha(ref: str = "HEAD", cwd: Path | None = None) -> str | None:
    """Get the abbreviated hash of a reference, or None if it does not resolve."""
    result = _query(["rev-parse", "--short", ref], cwd)
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def count_commits(since: str | None = None, cwd: Path | None = None) -> int:
    """Count commits reachable from HEAD, optionally excluding those in ``since``.

    Args:
        since: Tag or ref whose history is excluded; None counts all commits
        cwd: Working directory (defaults to current directory)

    Returns:
        Number of commits

    Raises:
        GitError: If the count cannot be determined
    """
    revision = f"{since}..HEAD" if since else "HEAD"
    try:
        result = run(["git", "rev-list", "--count", revision], cwd=cwd, check=True)
        return int(result.stdout.strip())
    except ShellError as e:
        raise GitError(
            f"Failed to count commits for '{revision}'",
            details=str(e),
            fix_hint="Ensure the repository has at least one commit",
        ) from e
    except ValueError as e:
        raise GitError(
            "Failed to parse commit count",
            details=str(e),
        ) from e
