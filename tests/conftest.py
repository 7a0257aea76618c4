"""Pytest configuration and fixtures."""

import subprocess
from pathlib import Path

import pytest
import structlog

from git_weblink.core.models.repository import RepositoryContext


def _git(repo_path: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo_path, capture_output=True, check=True)


@pytest.fixture(autouse=True)
def isolate_git(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Stop git from discovering repositories above the test directory."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent.resolve()))


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging calls so later tests log to the live streams."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a temporary Git repository with an origin remote and two branches."""
    repo_path = tmp_path / "widgets"
    repo_path.mkdir()

    _git(repo_path, "init")
    _git(repo_path, "config", "user.email", "test@test.com")
    _git(repo_path, "config", "user.name", "Test")
    _git(repo_path, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo_path, "remote", "add", "origin", "git@github.com:acme/widgets.git")

    (repo_path / "src").mkdir()
    (repo_path / "src" / "index.ts").write_text("export const x = 1;\n")
    (repo_path / "README.md").write_text("# Widgets\n")

    _git(repo_path, "add", ".")
    _git(repo_path, "commit", "-m", "Initial commit")
    _git(repo_path, "branch", "release/v2")

    return repo_path


@pytest.fixture
def sample_context() -> RepositoryContext:
    """Context for git@github.com:acme/widgets.git on main."""
    return RepositoryContext(
        remote_url="git@github.com:acme/widgets.git",
        branch="main",
        relative_file_path="src/index.ts",
        repo_root="/work/widgets",
    )
