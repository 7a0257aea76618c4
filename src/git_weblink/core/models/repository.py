"""Repository context models."""

from pydantic import BaseModel, ConfigDict


class RepositoryContext(BaseModel):
    """Snapshot of the repository that contains a local path.

    Built fresh for every action; all fields describe the same repository
    at query time.
    """

    model_config = ConfigDict(frozen=True)

    remote_url: str
    branch: str
    relative_file_path: str = ""  # always forward slashes
    repo_root: str
