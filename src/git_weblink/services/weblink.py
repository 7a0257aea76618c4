"""Web link service: resolve, generate and deliver URLs for user actions."""

from collections.abc import Awaitable, Callable
from pathlib import Path

import structlog
from pydantic import BaseModel

from git_weblink.config.settings import Settings, load_settings
from git_weblink.core.exceptions import (
    BranchEnumerationError,
    BranchSelectionCancelled,
    GitWeblinkError,
    RepositoryResolutionError,
    ResultSinkError,
    URLIndeterminateError,
    ValidationError,
)
from git_weblink.core.models.repository import RepositoryContext
from git_weblink.core.models.target import LineRange, TargetRequest
from git_weblink.git.locator import RepositoryLocator
from git_weblink.git.url_generator import generate
from git_weblink.services.picker import BranchPicker, InquirerBranchPicker
from git_weblink.services.sinks import BrowserSink, ClipboardSink, PrintSink, ResultSink

logger = structlog.get_logger(__name__)

REPOSITORY_FAILURE = "Failed to get repository information"
URL_FAILURE = "Could not determine web URL for this repository"
BRANCH_LIST_FAILURE = "Failed to list branches"


class ActionResult(BaseModel):
    """Outcome of one user action, ready to show to the user."""

    ok: bool
    url: str | None = None
    message: str | None = None
    cancelled: bool = False


class WebLinkService:
    """Service for the open/copy web link actions.

    Every action runs the same sequence: resolve the repository, optionally
    ask for a branch, generate the URL and hand it to a sink. Failures are
    converted to an ``ActionResult`` here and never propagate.
    """

    def __init__(
        self,
        locator: RepositoryLocator | None = None,
        settings_loader: Callable[[], Settings] = load_settings,
        picker: BranchPicker | None = None,
        browser: ResultSink | None = None,
        clipboard: ResultSink | None = None,
        printer: ResultSink | None = None,
    ) -> None:
        self._settings_loader = settings_loader
        self._locator = locator or RepositoryLocator.from_settings(settings_loader())
        self._picker = picker or InquirerBranchPicker()
        self._browser = browser or BrowserSink()
        self._clipboard = clipboard or ClipboardSink()
        self._printer = printer or PrintSink()

    def sink_for(self, action: str) -> ResultSink:
        """The sink for an action name: "open", "copy" or "print"."""
        sinks = {"open": self._browser, "copy": self._clipboard, "print": self._printer}
        if action not in sinks:
            raise ValidationError(f"Unknown action: {action}")
        return sinks[action]

    async def resolve_context(self, path: str | Path) -> RepositoryContext:
        """Resolve the repository context or raise ``RepositoryResolutionError``."""
        context = await self._locator.resolve(path)
        if context is None:
            raise RepositoryResolutionError(REPOSITORY_FAILURE, details={"path": str(path)})
        return context

    def build_url(self, request: TargetRequest) -> str:
        """Generate a URL with the host mapping as configured right now."""
        settings = self._settings_loader()
        url = generate(request, settings.effective_host_mapping)
        if url is None:
            raise URLIndeterminateError(
                URL_FAILURE, details={"remote_url": request.context.remote_url}
            )
        return url

    async def choose_branch(self, path: str | Path, current: str | None = None) -> str:
        """Ask the picker for a branch; raises ``BranchSelectionCancelled`` on dismissal."""
        directory = Path(path)
        branches = await self._locator.list_branches(
            directory if directory.is_dir() else directory.parent
        )
        choice = await self._picker.pick(branches, current=current)
        if not choice:
            raise BranchSelectionCancelled()
        return choice

    async def file_url(
        self,
        path: str | Path,
        line_range: LineRange | None = None,
        branch: str | None = None,
        pick_branch: bool = False,
    ) -> str:
        """URL of a file (blob view), optionally anchored to lines."""
        context = await self.resolve_context(path)
        if pick_branch:
            branch = await self.choose_branch(path, current=context.branch)
        request = TargetRequest(
            context=context,
            line_range=line_range.collapsed() if line_range else None,
            include_file_path=True,
            branch_override=branch,
        )
        return self.build_url(request)

    async def branch_url(
        self,
        path: str | Path,
        branch: str | None = None,
        pick_branch: bool = False,
    ) -> str:
        """URL of a branch (tree view)."""
        context = await self.resolve_context(path)
        if pick_branch:
            branch = await self.choose_branch(path, current=context.branch)
        request = TargetRequest(context=context, include_file_path=False, branch_override=branch)
        return self.build_url(request)

    async def open_file(self, path: str | Path, line_range: LineRange | None = None) -> ActionResult:
        return await self.run(lambda: self.file_url(path, line_range), self._browser)

    async def copy_file(self, path: str | Path, line_range: LineRange | None = None) -> ActionResult:
        return await self.run(lambda: self.file_url(path, line_range), self._clipboard)

    async def open_file_on_branch(
        self, path: str | Path, line_range: LineRange | None = None
    ) -> ActionResult:
        return await self.run(
            lambda: self.file_url(path, line_range, pick_branch=True), self._browser
        )

    async def copy_file_on_branch(
        self, path: str | Path, line_range: LineRange | None = None
    ) -> ActionResult:
        return await self.run(
            lambda: self.file_url(path, line_range, pick_branch=True), self._clipboard
        )

    async def open_branch(self, path: str | Path, pick: bool = False) -> ActionResult:
        return await self.run(lambda: self.branch_url(path, pick_branch=pick), self._browser)

    async def copy_branch(self, path: str | Path, pick: bool = False) -> ActionResult:
        return await self.run(lambda: self.branch_url(path, pick_branch=pick), self._clipboard)

    async def run(self, build: Callable[[], Awaitable[str]], sink: ResultSink) -> ActionResult:
        """Build a URL and deliver it, converting every failure to a message."""
        try:
            url = await build()
        except BranchSelectionCancelled:
            logger.debug("Branch selection cancelled")
            return ActionResult(ok=False, cancelled=True)
        except (RepositoryResolutionError, URLIndeterminateError) as e:
            logger.warning(e.message, **e.details)
            return ActionResult(ok=False, message=e.message)
        except BranchEnumerationError as e:
            logger.warning(e.message, **e.details)
            return ActionResult(ok=False, message=BRANCH_LIST_FAILURE)
        except GitWeblinkError as e:
            logger.warning("Action failed", error=e.message)
            return ActionResult(ok=False, message=f"Error: {e.message}")

        try:
            sink.deliver(url)
        except ResultSinkError as e:
            logger.error("Failed to deliver URL", action=e.action, url=url, error=e.message)
            return ActionResult(ok=False, url=url, message=f"Error {e.action}: {e.message}")

        return ActionResult(ok=True, url=url, message=sink.success_message(url))
