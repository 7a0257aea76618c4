"""Parsed Git remote models."""

from pydantic import BaseModel, ConfigDict


class RemoteDescriptor(BaseModel):
    """Host, owner and repository name extracted from a remote URL.

    ``host`` is always the normalized host. ``owner`` may contain a ``/``
    (nested GitLab groups, Azure DevOps ``organization/project``).
    ``repo`` never carries a trailing ``.git``.
    """

    model_config = ConfigDict(frozen=True)

    host: str = ""
    owner: str = ""
    repo: str = ""

    @property
    def is_empty(self) -> bool:
        """No URL can be built without a host and a repository name."""
        return not (self.host and self.repo)
