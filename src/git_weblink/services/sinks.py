"""Deliver a generated URL to the browser, the clipboard or stdout."""

import shutil
import subprocess
import sys
import webbrowser
from typing import Protocol

import click
import structlog

from git_weblink.core.exceptions import ResultSinkError

logger = structlog.get_logger(__name__)


class ResultSink(Protocol):
    """Something that accepts a finished URL."""

    action: str

    def deliver(self, url: str) -> None: ...

    def success_message(self, url: str) -> str | None: ...


class BrowserSink:
    """Opens URLs in the user's default web browser."""

    action = "opening browser"

    def deliver(self, url: str) -> None:
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as e:
            raise ResultSinkError(self.action, str(e), details={"url": url}) from e
        if not opened:
            raise ResultSinkError(self.action, "no runnable browser found", details={"url": url})
        logger.info("Opened URL in browser", url=url)

    def success_message(self, url: str) -> str | None:
        return f"Opened {url}"


def clipboard_command(platform: str | None = None) -> list[str] | None:
    """Find a clipboard writer for the platform, or ``None``."""
    platform = platform or sys.platform
    if platform == "darwin":
        candidates = [["pbcopy"]]
    elif platform.startswith("win") or platform == "cygwin":
        candidates = [["clip"]]
    else:
        candidates = [
            ["wl-copy"],
            ["xclip", "-selection", "clipboard"],
            ["xsel", "--clipboard", "--input"],
        ]
    for candidate in candidates:
        if shutil.which(candidate[0]):
            return candidate
    return None


class ClipboardSink:
    """Writes URLs to the system clipboard through the platform's copy tool."""

    action = "copying to clipboard"

    def __init__(self, command: list[str] | None = None, timeout: float = 5.0) -> None:
        self._command = command
        self._timeout = timeout

    def deliver(self, url: str) -> None:
        command = self._command or clipboard_command()
        if command is None:
            raise ResultSinkError(
                self.action,
                "no clipboard tool found (install wl-clipboard, xclip or xsel)",
            )
        try:
            subprocess.run(
                command,
                input=url,
                text=True,
                capture_output=True,
                check=True,
                timeout=self._timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise ResultSinkError(
                self.action, str(e), details={"command": command}
            ) from e
        logger.info("Copied URL to clipboard", url=url, command=command[0])

    def success_message(self, url: str) -> str | None:
        return f"Copied {url} to clipboard"


class PrintSink:
    """Writes URLs to stdout, for scripts and editor integrations."""

    action = "printing URL"

    def deliver(self, url: str) -> None:
        click.echo(url)

    def success_message(self, url: str) -> str | None:
        return None
