"""Session facade combining lines, cursor state, registers, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Optional, Sequence, Tuple

from kilo_engine.config import EngineConfig
from kilo_engine.layout import Viewport, WrapMapper
from kilo_engine.runtime import telemetry

from .document import LineBuffer
from .registers import RegisterBank
from .state import BufferState
from .undo import UndoSnapshot
from .validation import clamp

Position = Tuple[int, int]  # (logical line, logical column)


class Buffer:
    """Everything one editing session owns.

    The cursor is stored in visual coordinates (``state.cursor`` relative to
    the viewport plus ``state.row_offset``). Logical positions are always
    derived through the wrap mapper and must be re-derived after any
    mutation that can change a line's length.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[LineBuffer] = None,
        state: Optional[BufferState] = None,
        registers: Optional[RegisterBank] = None,
        undo: Optional[UndoSnapshot] = None,
        viewport: Optional[Viewport] = None,
        config: Optional[EngineConfig] = None,
        file_name: Optional[str] = None,
    ) -> None:
        self.name = name
        self.config = config or EngineConfig()
        self.document = document or LineBuffer()
        self.state = state or BufferState()
        self.registers = registers or RegisterBank()
        self.undo = undo or UndoSnapshot()
        self.viewport = viewport or Viewport(
            self.config.viewport_width, self.config.viewport_height
        )
        self.file_name = file_name
        self.smart_indent = self.config.smart_indent

    @classmethod
    def from_lines(cls, lines: Iterable[str], **kwargs: object) -> "Buffer":
        return cls(document=LineBuffer.from_lines(lines), **kwargs)  # type: ignore[arg-type]

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def mapper(self) -> WrapMapper:
        return WrapMapper(self.viewport.width)

    @property
    def indent_width(self) -> int:
        return self.config.indent_width

    def line_text(self, index: int) -> str:
        if self.document.is_empty:
            return ""
        return self.document.get_line(index)

    def logical_cursor(self) -> Position:
        lines = self.document.snapshot()
        if not lines:
            return (0, 0)
        row = self.state.absolute_row
        continuation = self.state.continuation
        mapper = self.mapper
        line = mapper.logical_line_of(lines, row, continuation=continuation)
        col = mapper.logical_column_of(
            lines, row, self.state.cursor[1], continuation=continuation
        )
        return (line, col)

    def place_cursor(self, line: int, col: int, *, insert: bool = False) -> Position:
        """Clamp a logical position, then store it as a visual cursor.

        Normal-mode positions stop on the last character; ``insert=True``
        allows the column just past the end of the line.
        """

        lines = self.document.snapshot()
        if not lines:
            self.state.row_offset = 0
            self.state.continuation = False
            self.state.set_cursor(0, 0)
            return (0, 0)

        line = clamp(line, 0, len(lines) - 1)
        text = lines[line]
        max_col = len(text) if insert else max(len(text) - 1, 0)
        col = clamp(col, 0, max_col)

        mapper = self.mapper
        row, visual_col = mapper.visual_position_of(lines, line, col)
        self.state.continuation = mapper.is_continuation(text, col)
        self._scroll_to(row)
        self.state.set_cursor(row - self.state.row_offset, visual_col)
        return (line, col)

    def clamp_cursor(self, *, insert: bool = False) -> Position:
        line, col = self.logical_cursor()
        return self.place_cursor(line, col, insert=insert)

    def set_viewport(self, width: int, height: int) -> None:
        line, col = self.logical_cursor()
        self.viewport = Viewport(width, height)
        self.state.row_offset = 0
        # The column was already valid for the active mode; keep it as is.
        self.place_cursor(line, col, insert=True)

    def load(self, lines: Iterable[str], *, file_name: Optional[str] = None) -> None:
        self.document.load(lines)
        self.document.mark_clean()
        self.undo.clear()
        if file_name is not None:
            self.file_name = file_name
        self.state.row_offset = 0
        self.place_cursor(0, 0)

    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def restore_snapshot(self) -> bool:
        """Swap the undo copy back in; ``False`` when nothing was captured."""

        restored = self.undo.restore()
        if restored is None:
            return False
        line, col = self.logical_cursor()
        with telemetry.span(
            "buffer::undo_restore", component="buffer", metadata={"buffer": self.name}
        ):
            self.document.load(restored)
            self.document.dirty += 1
        self.place_cursor(line, col)
        return True

    def _scroll_to(self, row: int) -> None:
        height = self.viewport.height
        if row < self.state.row_offset:
            self.state.row_offset = row
        elif row >= self.state.row_offset + height:
            self.state.row_offset = row - height + 1


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one mutating command: snapshot for undo, then a telemetry span."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._dirty_before = 0

    def __enter__(self) -> "Transaction":
        self.buffer.undo.capture(self.buffer.document.snapshot())
        self._dirty_before = self.buffer.document.dirty
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    @property
    def changed(self) -> bool:
        return self.buffer.document.dirty != self._dirty_before

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Position", "Transaction"]
