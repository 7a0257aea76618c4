"""Branch picker built on InquirerPy."""

import sys
from collections.abc import Sequence
from typing import Protocol

from InquirerPy import inquirer
from InquirerPy.base.control import Choice

from git_weblink.core.exceptions import ValidationError


class BranchPicker(Protocol):
    """Asks the user for one branch; ``None`` means the user cancelled."""

    async def pick(self, branches: Sequence[str], current: str | None = None) -> str | None: ...


def build_choices(branches: Sequence[str], *, current: str | None = None) -> list[Choice]:
    """Return Choice objects with the current branch placed first."""
    ordered = ([current] if current else []) + list(branches)
    result: list[Choice] = []
    seen: set[str] = set()
    for name in ordered:
        if not name or name in seen:
            continue
        seen.add(name)
        label = f"{name} (current)" if name == current else name
        result.append(Choice(value=name, name=label))
    return result


class InquirerBranchPicker:
    """Fuzzy-searchable branch list in the terminal. Escape or Ctrl-C cancels."""

    def __init__(self, message: str = "Select a branch") -> None:
        self._message = message

    async def pick(self, branches: Sequence[str], current: str | None = None) -> str | None:
        if not sys.stdin.isatty():
            raise ValidationError(
                "Branch selection requires a TTY. Pass --branch to run non-interactively."
            )
        choices = build_choices(branches, current=current)
        if not choices:
            return None
        prompt = inquirer.fuzzy(
            message=self._message,
            choices=choices,
            mandatory=False,
            keybindings={"skip": [{"key": "escape"}]},
        )
        try:
            return await prompt.execute_async()
        except KeyboardInterrupt:
            return None
