"""Locate the Git repository, remote and branch for a local path."""

import asyncio
from pathlib import Path

import structlog

from git_weblink.config.settings import Settings
from git_weblink.core.exceptions import BranchEnumerationError, GitCommandError
from git_weblink.core.models.repository import RepositoryContext

logger = structlog.get_logger(__name__)


class RepositoryLocator:
    """Queries the git CLI about the repository containing a path.

    Uses asyncio subprocesses + git CLI directly (no gitpython dependency).
    Every query is read-only and bounded by ``timeout`` seconds.
    """

    def __init__(
        self,
        git_executable: str = "git",
        timeout: float = 5.0,
        remote_name: str = "origin",
    ) -> None:
        self._git = git_executable
        self._timeout = timeout
        self._remote_name = remote_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "RepositoryLocator":
        return cls(
            git_executable=settings.git_executable,
            timeout=settings.git_timeout,
            remote_name=settings.remote_name,
        )

    async def _run_git(self, cwd: Path, *args: str) -> str:
        """Run a git command and return its stripped stdout."""
        command = [self._git, *args]
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=str(cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise GitCommandError(command, None, str(e)) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise GitCommandError(command, None, f"timed out after {self._timeout}s") from e

        logger.debug("git query", command=command, cwd=str(cwd), returncode=process.returncode)
        if process.returncode != 0:
            raise GitCommandError(
                command, process.returncode, stderr.decode("utf-8", errors="replace")
            )
        return stdout.decode("utf-8", errors="replace").strip()

    async def get_repo_root(self, cwd: Path) -> str:
        return await self._run_git(cwd, "rev-parse", "--show-toplevel")

    async def get_remote_url(self, cwd: Path) -> str:
        return await self._run_git(cwd, "remote", "get-url", self._remote_name)

    async def get_current_branch(self, cwd: Path) -> str:
        """Get the current branch name; a detached HEAD is a failure."""
        try:
            return await self._run_git(cwd, "symbolic-ref", "--short", "HEAD")
        except GitCommandError:
            branch = await self._run_git(cwd, "rev-parse", "--abbrev-ref", "HEAD")
            if branch == "HEAD":
                raise GitCommandError(
                    [self._git, "rev-parse", "--abbrev-ref", "HEAD"], 0, "detached HEAD"
                )
            return branch

    async def resolve(self, file_path: str | Path) -> RepositoryContext | None:
        """Describe the repository containing ``file_path``.

        The root, remote and branch queries run concurrently. Returns
        ``None`` if any of them fails or comes back empty; a partially
        filled context is never returned.
        """
        path = Path(file_path).expanduser().resolve()
        if not path.exists():
            logger.warning("Path does not exist", path=str(path))
            return None
        workdir = path if path.is_dir() else path.parent

        results = await asyncio.gather(
            self.get_repo_root(workdir),
            self.get_remote_url(workdir),
            self.get_current_branch(workdir),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, GitCommandError):
                logger.warning(
                    "Failed to get repository information",
                    path=str(path),
                    command=" ".join(result.command),
                    error=result.details.get("stderr"),
                )
                return None
            if isinstance(result, BaseException):
                raise result

        repo_root, remote_url, branch = results
        if not (repo_root and remote_url and branch):
            logger.warning("Empty repository information", path=str(path))
            return None

        relative = relative_posix_path(path, repo_root)
        if relative is None:
            logger.warning("Path is outside the repository", path=str(path), root=repo_root)
            return None

        return RepositoryContext(
            remote_url=remote_url,
            branch=branch,
            relative_file_path=relative,
            repo_root=repo_root,
        )

    async def list_branches(self, directory_path: str | Path) -> list[str]:
        """List local branches, most recently committed first."""
        workdir = Path(directory_path).expanduser()
        if workdir.is_file():
            workdir = workdir.parent
        try:
            output = await self._run_git(
                workdir,
                "for-each-ref",
                "--sort=-committerdate",
                "refs/heads/",
                "--format=%(refname:short)",
            )
        except GitCommandError as e:
            raise BranchEnumerationError(
                "Failed to list branches",
                details={"path": str(workdir), **e.details},
            ) from e
        return parse_branch_list(output)


def parse_branch_list(output: str) -> list[str]:
    """Branch names from git output, without the current-branch marker."""
    branches = []
    for line in output.splitlines():
        name = line.strip().lstrip("*").strip()
        if name:
            branches.append(name)
    return branches


def relative_posix_path(path: Path, repo_root: str) -> str | None:
    """Path relative to the repository root with forward slashes.

    Empty for the root itself; ``None`` when the path is outside the root.
    """
    try:
        relative = path.relative_to(Path(repo_root).resolve())
    except ValueError:
        return None
    posix = relative.as_posix()
    return "" if posix == "." else posix
