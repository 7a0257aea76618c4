"""Tests for the repository locator."""

import os
import subprocess
from pathlib import Path

import pytest

from git_weblink.core.exceptions import BranchEnumerationError, GitCommandError
from git_weblink.git.locator import (
    RepositoryLocator,
    parse_branch_list,
    relative_posix_path,
)


@pytest.fixture
def locator() -> RepositoryLocator:
    return RepositoryLocator(timeout=10.0)


@pytest.fixture
def slow_git(tmp_path: Path) -> Path:
    """A stand-in git executable that hangs well past any test timeout."""
    script = tmp_path / "slowgit"
    script.write_text("#!/bin/sh\nexec sleep 30\n")
    script.chmod(0o755)
    return script


@pytest.mark.unit
class TestRepositoryLocatorResolve:
    """Tests for RepositoryLocator.resolve."""

    @pytest.mark.asyncio
    async def test_resolve_file(self, locator: RepositoryLocator, git_repo: Path) -> None:
        context = await locator.resolve(git_repo / "src" / "index.ts")
        assert context is not None
        assert context.remote_url == "git@github.com:acme/widgets.git"
        assert context.branch == "main"
        assert context.relative_file_path == "src/index.ts"
        assert Path(context.repo_root).resolve() == git_repo.resolve()

    @pytest.mark.asyncio
    async def test_resolve_root_file(self, locator: RepositoryLocator, git_repo: Path) -> None:
        context = await locator.resolve(git_repo / "README.md")
        assert context is not None
        assert context.relative_file_path == "README.md"

    @pytest.mark.asyncio
    async def test_resolve_directory(self, locator: RepositoryLocator, git_repo: Path) -> None:
        context = await locator.resolve(git_repo / "src")
        assert context is not None
        assert context.relative_file_path == "src"

    @pytest.mark.asyncio
    async def test_resolve_repo_root(self, locator: RepositoryLocator, git_repo: Path) -> None:
        context = await locator.resolve(git_repo)
        assert context is not None
        assert context.relative_file_path == ""

    @pytest.mark.asyncio
    async def test_resolve_other_branch(self, locator: RepositoryLocator, git_repo: Path) -> None:
        subprocess.run(
            ["git", "checkout", "release/v2"], cwd=git_repo, capture_output=True, check=True
        )
        context = await locator.resolve(git_repo / "README.md")
        assert context is not None
        assert context.branch == "release/v2"

    @pytest.mark.asyncio
    async def test_not_a_repository(self, locator: RepositoryLocator, tmp_path: Path) -> None:
        outside = tmp_path / "plain"
        outside.mkdir()
        (outside / "notes.txt").write_text("hello\n")
        assert await locator.resolve(outside / "notes.txt") is None

    @pytest.mark.asyncio
    async def test_missing_remote(self, locator: RepositoryLocator, git_repo: Path) -> None:
        subprocess.run(
            ["git", "remote", "remove", "origin"], cwd=git_repo, capture_output=True, check=True
        )
        assert await locator.resolve(git_repo / "README.md") is None

    @pytest.mark.asyncio
    async def test_detached_head(self, locator: RepositoryLocator, git_repo: Path) -> None:
        subprocess.run(
            ["git", "checkout", "--detach"], cwd=git_repo, capture_output=True, check=True
        )
        assert await locator.resolve(git_repo / "README.md") is None

    @pytest.mark.asyncio
    async def test_missing_path(self, locator: RepositoryLocator, git_repo: Path) -> None:
        assert await locator.resolve(git_repo / "nope" / "missing.py") is None

    @pytest.mark.asyncio
    async def test_missing_git_executable(self, git_repo: Path) -> None:
        locator = RepositoryLocator(git_executable="definitely-not-git-xyz")
        assert await locator.resolve(git_repo / "README.md") is None


@pytest.mark.unit
class TestRepositoryLocatorQueries:
    """Tests for the individual git queries."""

    @pytest.mark.asyncio
    async def test_run_git_failure_raises(
        self, locator: RepositoryLocator, tmp_path: Path
    ) -> None:
        with pytest.raises(GitCommandError) as exc_info:
            await locator._run_git(tmp_path, "rev-parse", "--show-toplevel")
        assert exc_info.value.returncode not in (0, None)

    @pytest.mark.asyncio
    async def test_remote_name_setting(self, git_repo: Path) -> None:
        subprocess.run(
            ["git", "remote", "add", "upstream", "https://gitlab.com/acme/widgets.git"],
            cwd=git_repo,
            capture_output=True,
            check=True,
        )
        locator = RepositoryLocator(remote_name="upstream")
        context = await locator.resolve(git_repo / "README.md")
        assert context is not None
        assert context.remote_url == "https://gitlab.com/acme/widgets.git"


    @pytest.mark.asyncio
    async def test_run_git_timeout_raises(self, slow_git: Path, tmp_path: Path) -> None:
        locator = RepositoryLocator(git_executable=str(slow_git), timeout=0.3)
        with pytest.raises(GitCommandError) as exc_info:
            await locator._run_git(tmp_path, "rev-parse", "--show-toplevel")
        assert exc_info.value.returncode is None
        assert "timed out" in exc_info.value.stderr

    @pytest.mark.asyncio
    async def test_resolve_timeout_is_failure(self, slow_git: Path, git_repo: Path) -> None:
        locator = RepositoryLocator(git_executable=str(slow_git), timeout=0.3)
        assert await locator.resolve(git_repo / "README.md") is None

    @pytest.mark.asyncio
    async def test_list_branches_timeout(self, slow_git: Path, git_repo: Path) -> None:
        locator = RepositoryLocator(git_executable=str(slow_git), timeout=0.3)
        with pytest.raises(BranchEnumerationError):
            await locator.list_branches(git_repo)


@pytest.mark.unit
class TestRepositoryLocatorBranches:
    """Tests for RepositoryLocator.list_branches."""

    @pytest.mark.asyncio
    async def test_list_branches(self, locator: RepositoryLocator, git_repo: Path) -> None:
        branches = await locator.list_branches(git_repo)
        assert set(branches) == {"main", "release/v2"}

    @pytest.mark.asyncio
    async def test_list_branches_from_file(
        self, locator: RepositoryLocator, git_repo: Path
    ) -> None:
        branches = await locator.list_branches(git_repo / "README.md")
        assert "main" in branches

    @pytest.mark.asyncio
    async def test_most_recent_first(self, locator: RepositoryLocator, git_repo: Path) -> None:
        env = {
            **os.environ,
            "GIT_COMMITTER_DATE": "2099-01-01T00:00:00",
            "GIT_AUTHOR_DATE": "2099-01-01T00:00:00",
        }
        subprocess.run(
            ["git", "checkout", "-b", "feature/late"], cwd=git_repo, capture_output=True, check=True
        )
        (git_repo / "late.txt").write_text("late\n")
        subprocess.run(["git", "add", "."], cwd=git_repo, capture_output=True, check=True)
        subprocess.run(
            ["git", "commit", "-m", "Late commit"],
            cwd=git_repo,
            capture_output=True,
            check=True,
            env=env,
        )
        branches = await locator.list_branches(git_repo)
        assert branches[0] == "feature/late"

    @pytest.mark.asyncio
    async def test_list_branches_failure(self, locator: RepositoryLocator, tmp_path: Path) -> None:
        with pytest.raises(BranchEnumerationError):
            await locator.list_branches(tmp_path)


@pytest.mark.unit
class TestLocatorHelpers:
    """Tests for locator helper functions."""

    def test_parse_branch_list_strips_marker(self) -> None:
        output = "  feature/x\n* main\n\n  release/v2  \n"
        assert parse_branch_list(output) == ["feature/x", "main", "release/v2"]

    def test_parse_branch_list_empty(self) -> None:
        assert parse_branch_list("") == []

    def test_relative_posix_path(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b.txt"
        assert relative_posix_path(path, str(tmp_path)) == "a/b.txt"

    def test_relative_posix_path_root(self, tmp_path: Path) -> None:
        assert relative_posix_path(tmp_path, str(tmp_path)) == ""

    def test_relative_posix_path_outside(self, tmp_path: Path) -> None:
        assert relative_posix_path(Path("/elsewhere/x"), str(tmp_path)) is None
