"""Render state handed to the host after each key event."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .state import Cursor, Highlight


@dataclass(frozen=True, slots=True)
class RenderState:
    """Everything a renderer needs after one key event."""

    lines: Tuple[str, ...]
    cursor: Cursor
    row_offset: int
    logical_cursor: Tuple[int, int]
    mode: str
    status: str = ""
    highlight: Optional[Highlight] = None
    pending: str = ""
    command_line: str = ""
    dirty: bool = False
    quit_requested: bool = False
    viewport: Tuple[int, int] = (80, 24)
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


__all__ = ["RenderState"]
