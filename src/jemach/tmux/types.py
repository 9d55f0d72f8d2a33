"""Data types for tmux sessions and panes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SplitLayout = Literal["horizontal", "vertical", "grid"]


@dataclass(frozen=True, slots=True)
class TmuxPane:
    """A pane as reported by ``tmux list-panes``.

    Attributes:
        id: Pane id (e.g., "%3").
        index: Pane index within its window.
        active: Whether the pane is the active one.
        width: Width in columns.
        height: Height in rows.
        title: Pane title.
        current_command: Foreground command running in the pane.

    """

    id: str
    index: int
    active: bool
    width: int
    height: int
    title: str
    current_command: str

    def matches(self, name_filter: str) -> bool:
        """Case-insensitive match of the filter against command or title."""
        needle = name_filter.lower()
        return needle in self.current_command.lower() or needle in self.title.lower()


@dataclass(frozen=True, slots=True)
class TmuxSession:
    """A tmux session."""

    id: str
    name: str
