"""Cursor, pending-command, and highlight state for a buffer session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Cursor = Tuple[int, int]  # (visual row within viewport, visual column)
Highlight = Tuple[int, int]  # (anchor, current)


@dataclass(slots=True)
class PendingCommand:
    """Keys typed toward a multi-key command plus the numeric prefix."""

    keys: List[str] = field(default_factory=list)
    count: Optional[int] = None

    @property
    def repeat(self) -> int:
        return self.count or 1

    @property
    def text(self) -> str:
        prefix = str(self.count) if self.count else ""
        return prefix + "".join(self.keys)

    def push_digit(self, digit: int) -> None:
        self.count = (self.count or 0) * 10 + digit

    def reset(self) -> None:
        self.keys.clear()
        self.count = None


@dataclass(slots=True)
class BufferState:
    """Mutable cursor state; logical positions are derived, never stored."""

    cursor: Cursor = (0, 0)
    row_offset: int = 0
    continuation: bool = False
    highlight: Optional[Highlight] = None
    pending: PendingCommand = field(default_factory=PendingCommand)
    quit_warnings: int = 0
    search: str = ""
    quit_requested: bool = False

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    @property
    def absolute_row(self) -> int:
        return self.row_offset + self.cursor[0]

    def clear_highlight(self) -> None:
        self.highlight = None

    def set_highlight(self, anchor: int, current: int) -> None:
        self.highlight = (anchor, current)
