"""Git integration module for git-weblink."""

from git_weblink.git.locator import RepositoryLocator
from git_weblink.git.remote_parser import normalize_host, parse_remote_url
from git_weblink.git.url_generator import HostFamily, generate, host_family

__all__ = [
    "HostFamily",
    "RepositoryLocator",
    "generate",
    "host_family",
    "normalize_host",
    "parse_remote_url",
]
