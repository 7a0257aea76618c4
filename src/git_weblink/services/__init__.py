"""Action services for git-weblink."""

from git_weblink.services.weblink import ActionResult, WebLinkService

__all__ = [
    "ActionResult",
    "WebLinkService",
]
