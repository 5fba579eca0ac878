"""Exception hierarchy for release-stage.

Exit codes follow Unix conventions:
- 1: General error
- 2: Configuration error
- 4: Git error
"""


class ReleaseError(Exception):
    """Base exception for all release-stage errors.

    Each subclass defines an exit_code for CLI error reporting.
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        details: str | None = None,
        fix_hint: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Brief error message
            details: Detailed explanation of what went wrong
            fix_hint: Suggested command or action to fix the issue
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"\nDetails: {self.details}")
        if self.fix_hint:
            parts.append(f"\nFix: {self.fix_hint}")
        return "".join(parts)


class ConfigurationError(ReleaseError):
    """Release configuration errors.

    Raised when:
    - More than one release stage command is invoked
    - No base version can be determined
    - useLastTag is set but no version tag exists
    - Config file or property values are invalid
    - The license header file cannot be written
    """

    exit_code = 2


class GitError(ReleaseError):
    """Git operation failures.

    Raised when a git command that must succeed fails, e.g. listing
    tags in an existing repository.
    """

    exit_code = 4
