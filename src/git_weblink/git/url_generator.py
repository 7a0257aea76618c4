"""Build hosting-service web URLs for files and branches."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

from git_weblink.core.models.remote import RemoteDescriptor
from git_weblink.core.models.target import LineRange, TargetKind, TargetRequest
from git_weblink.git.remote_parser import parse_remote_url


class HostFamily(str, Enum):
    """Hosting providers with a distinct URL grammar."""

    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    AZURE_DEVOPS = "azure_devops"
    VISUAL_STUDIO = "visual_studio"
    GENERIC = "generic"


@dataclass(frozen=True)
class HostGrammar:
    """URL shapes for one host family.

    ``tree(remote, branch)`` and ``blob(remote, branch, path)`` return full
    URLs; ``anchor(start, end)`` returns the line suffix, ``end`` being
    ``None`` for a single line.
    """

    tree: Callable[[RemoteDescriptor, str], str]
    blob: Callable[[RemoteDescriptor, str, str], str]
    anchor: Callable[[int, int | None], str]


def _web_root(remote: RemoteDescriptor) -> str:
    path = "/".join(part for part in (remote.owner, remote.repo) if part)
    return f"https://{remote.host}/{path}"


def _azure_devops_root(remote: RemoteDescriptor) -> str:
    org, _, project = remote.owner.partition("/")
    # dev.azure.com/org/_git/repo: the project is named after the repo
    project = project or remote.repo
    return f"https://{remote.host}/{org}/{project}/_git/{remote.repo}"


def _visual_studio_root(remote: RemoteDescriptor) -> str:
    return f"https://{remote.host}/{remote.owner}/_git/{remote.repo}"


def _github_anchor(start: int, end: int | None) -> str:
    return f"#L{start}-L{end}" if end else f"#L{start}"


def _gitlab_anchor(start: int, end: int | None) -> str:
    return f"#L{start}-{end}" if end else f"#L{start}"


def _bitbucket_anchor(start: int, end: int | None) -> str:
    return f"#lines-{start}:{end}" if end else f"#lines-{start}"


def _azure_anchor(start: int, end: int | None) -> str:
    return f"&line={start}&lineEnd={end}" if end else f"&line={start}"


def _azure_grammar(root: Callable[[RemoteDescriptor], str]) -> HostGrammar:
    return HostGrammar(
        tree=lambda r, branch: f"{root(r)}?version=GB{branch}",
        blob=lambda r, branch, path: (
            f"{root(r)}?path={quote(path, safe='')}&version=GB{branch}"
        ),
        anchor=_azure_anchor,
    )


_GITHUB_STYLE = HostGrammar(
    tree=lambda r, branch: f"{_web_root(r)}/tree/{branch}",
    blob=lambda r, branch, path: f"{_web_root(r)}/blob/{branch}/{path}",
    anchor=_github_anchor,
)

GRAMMARS: dict[HostFamily, HostGrammar] = {
    HostFamily.GITHUB: _GITHUB_STYLE,
    HostFamily.GITLAB: HostGrammar(
        tree=lambda r, branch: f"{_web_root(r)}/-/tree/{branch}",
        blob=lambda r, branch, path: f"{_web_root(r)}/-/blob/{branch}/{path}",
        anchor=_gitlab_anchor,
    ),
    HostFamily.BITBUCKET: HostGrammar(
        tree=lambda r, branch: f"{_web_root(r)}/src/{branch}",
        blob=lambda r, branch, path: f"{_web_root(r)}/src/{branch}/{path}",
        anchor=_bitbucket_anchor,
    ),
    HostFamily.AZURE_DEVOPS: _azure_grammar(_azure_devops_root),
    HostFamily.VISUAL_STUDIO: _azure_grammar(_visual_studio_root),
    # Self-hosted front ends fall back to GitHub-style URLs
    HostFamily.GENERIC: _GITHUB_STYLE,
}


def host_family(host: str) -> HostFamily:
    """Pick the URL grammar for a normalized host."""
    if host == "github.com":
        return HostFamily.GITHUB
    if host == "gitlab.com":
        return HostFamily.GITLAB
    if host == "bitbucket.org":
        return HostFamily.BITBUCKET
    lowered = host.lower()
    if "dev.azure.com" in lowered:
        return HostFamily.AZURE_DEVOPS
    if "visualstudio.com" in lowered:
        return HostFamily.VISUAL_STUDIO
    return HostFamily.GENERIC


def line_anchor(grammar: HostGrammar, line_range: LineRange | None) -> str:
    """Format a line range for a grammar; a range ending at or before its start is one line."""
    if line_range is None or line_range.start is None:
        return ""
    end = line_range.end if line_range.is_multiline else None
    return grammar.anchor(line_range.start, end)


def generate(request: TargetRequest, host_mapping: dict[str, str] | None = None) -> str | None:
    """Generate the web URL for a request.

    Branch requests, and file requests without a relative path, get the
    tree URL with any line range dropped. File requests get the blob URL
    plus a line anchor when a range is given.

    Returns ``None`` only when the remote yields no host or no repository
    name; any other remote produces a best-effort URL.
    """
    remote = parse_remote_url(request.context.remote_url, host_mapping)
    if remote.is_empty:
        return None

    grammar = GRAMMARS[host_family(remote.host)]
    branch = request.branch

    if request.kind is TargetKind.BRANCH:
        return grammar.tree(remote, branch)

    url = grammar.blob(remote, branch, request.context.relative_file_path)
    return url + line_anchor(grammar, request.line_range)
