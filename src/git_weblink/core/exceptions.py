"""Exception hierarchy for git-weblink."""

from typing import Any


class GitWeblinkError(Exception):
    """Base error for all git-weblink failures."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(GitWeblinkError):
    """Raised when settings cannot be loaded or are invalid."""


class ValidationError(GitWeblinkError):
    """Raised when user-supplied input is malformed."""


class RepositoryResolutionError(GitWeblinkError):
    """Raised when the repository containing a path cannot be described."""


class BranchEnumerationError(GitWeblinkError):
    """Raised when local branches cannot be listed."""


class URLIndeterminateError(GitWeblinkError):
    """Raised when no web URL can be built from a remote."""


class BranchSelectionCancelled(GitWeblinkError):
    """Raised when the user dismisses the branch picker."""

    def __init__(self) -> None:
        super().__init__("Branch selection cancelled")


class ResultSinkError(GitWeblinkError):
    """Raised when a URL cannot be delivered to the browser or clipboard."""

    def __init__(self, action: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)
        self.action = action


class GitCommandError(GitWeblinkError):
    """Raised when a git invocation fails, times out or cannot start."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str | None = None) -> None:
        super().__init__(
            f"Git command failed: {' '.join(command)}",
            details={"returncode": returncode, "stderr": (stderr or "").strip()},
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr or ""
