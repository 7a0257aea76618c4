"""Core domain models and exceptions for git-weblink."""

from git_weblink.core.exceptions import (
    BranchEnumerationError,
    BranchSelectionCancelled,
    ConfigurationError,
    GitCommandError,
    GitWeblinkError,
    RepositoryResolutionError,
    ResultSinkError,
    URLIndeterminateError,
    ValidationError,
)
from git_weblink.core.models import (
    LineRange,
    RemoteDescriptor,
    RepositoryContext,
    TargetKind,
    TargetRequest,
)

__all__ = [
    # Models
    "RemoteDescriptor",
    "RepositoryContext",
    "LineRange",
    "TargetKind",
    "TargetRequest",
    # Exceptions
    "GitWeblinkError",
    "ConfigurationError",
    "GitCommandError",
    "ValidationError",
    "RepositoryResolutionError",
    "BranchEnumerationError",
    "URLIndeterminateError",
    "BranchSelectionCancelled",
    "ResultSinkError",
]
