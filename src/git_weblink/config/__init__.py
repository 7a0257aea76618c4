"""Configuration for git-weblink."""

from git_weblink.config.logging import configure_logging
from git_weblink.config.settings import DEFAULT_HOST_MAPPING, Settings, load_settings

__all__ = ["DEFAULT_HOST_MAPPING", "Settings", "configure_logging", "load_settings"]
