"""Line ranges and URL generation requests."""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from git_weblink.core.models.repository import RepositoryContext


class TargetKind(str, Enum):
    """Which page of the hosting service a URL points at."""

    FILE = "file"  # blob view
    BRANCH = "branch"  # tree view


class LineRange(BaseModel):
    """A 1-based, inclusive range of lines.

    A range whose ``end`` equals ``start`` must be collapsed (``end`` cleared)
    before it reaches URL generation; use ``collapsed()`` or
    ``from_selection()``.
    """

    model_config = ConfigDict(frozen=True)

    start: int | None = Field(default=None, ge=1)
    end: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _check_order(self) -> "LineRange":
        if self.end is not None:
            if self.start is None:
                raise ValueError("end requires start")
            if self.end < self.start:
                raise ValueError(f"end ({self.end}) is before start ({self.start})")
        return self

    @classmethod
    def single(cls, line: int) -> "LineRange":
        """Zero-width range for a single line (context-menu invocations)."""
        return cls(start=line)

    @classmethod
    def from_selection(cls, start: int, end: int | None = None) -> "LineRange":
        return cls(start=start, end=end).collapsed()

    def collapsed(self) -> "LineRange":
        if self.end is not None and self.end == self.start:
            return LineRange(start=self.start)
        return self

    @property
    def is_multiline(self) -> bool:
        return self.start is not None and self.end is not None and self.end > self.start


class TargetRequest(BaseModel):
    """Everything URL generation needs for one action."""

    model_config = ConfigDict(frozen=True)

    context: RepositoryContext
    line_range: LineRange | None = None
    include_file_path: bool = True
    branch_override: str | None = None

    @property
    def branch(self) -> str:
        return self.branch_override or self.context.branch

    @property
    def kind(self) -> TargetKind:
        if not self.include_file_path or not self.context.relative_file_path:
            return TargetKind.BRANCH
        return TargetKind.FILE


_LOCATION = re.compile(r"^(?P<path>.+?):(?P<start>\d+)(?:-(?P<end>\d+))?$")


def parse_location(location: str) -> tuple[str, LineRange | None]:
    """Split ``path``, ``path:12`` or ``path:10-20`` into a path and line range.

    A reversed range (``path:20-10``) is put back in order.
    """
    match = _LOCATION.match(location)
    if not match:
        return location, None
    start = int(match.group("start"))
    end = int(match.group("end")) if match.group("end") else None
    if start < 1:
        return location, None
    if end is not None and end < start:
        start, end = end, start
    return match.group("path"), LineRange.from_selection(start, end)
