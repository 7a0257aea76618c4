"""Application settings using Pydantic Settings."""

from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from git_weblink.core.exceptions import ConfigurationError

DEFAULT_HOST_MAPPING: dict[str, str] = {
    "github.com": "github.com",
    "gitlab.com": "gitlab.com",
    "bitbucket.org": "bitbucket.org",
}


class Settings(BaseSettings):
    """Settings loaded from ``GIT_WEBLINK_*`` environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="GIT_WEBLINK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Raw host alias -> canonical host, e.g. {"git.corp.example": "github.com"}
    host_mapping: dict[str, str] = Field(default_factory=dict)

    # Git
    git_executable: str = "git"
    git_timeout: float = Field(default=5.0, gt=0)
    remote_name: str = "origin"

    # Logging
    log_level: str = "WARNING"
    log_json: bool = False

    # CLI
    default_action: Literal["open", "copy", "print"] = "open"

    @property
    def effective_host_mapping(self) -> dict[str, str]:
        """Built-in defaults with the user's entries merged on top."""
        return {**DEFAULT_HOST_MAPPING, **self.host_mapping}


def load_settings(**overrides) -> Settings:
    """Build a fresh settings instance.

    Not cached: configuration changes take effect on the next call.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid git-weblink settings: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e
