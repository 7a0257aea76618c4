"""Domain models for git-weblink."""

from git_weblink.core.models.remote import RemoteDescriptor
from git_weblink.core.models.repository import RepositoryContext
from git_weblink.core.models.target import LineRange, TargetKind, TargetRequest, parse_location

__all__ = [
    "RemoteDescriptor",
    "RepositoryContext",
    "LineRange",
    "TargetKind",
    "TargetRequest",
    "parse_location",
]
