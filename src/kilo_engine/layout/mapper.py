"""Translation between logical (line, column) and wrapped visual rows.

A logical line of length ``k`` occupies ``ceil(k / W)`` visual rows when
``k > 0`` and exactly one row when empty. Absolute visual rows count from the
top of the document; the buffer subtracts its ``row_offset`` to obtain a row
relative to the viewport.

The one ambiguous position is the end of a line whose length is an exact
multiple of ``W``: inserting there puts the cursor on column 0 of a row that
the line does not (yet) own. Callers flag that position with
``continuation=True`` so the row still resolves to the line above it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from kilo_engine.errors import OutOfRange


def _ensure_line_index(index: int, upper: int) -> None:
    if index < 0 or index > upper:
        raise OutOfRange(f"line {index} out of range 0..{upper}", index=index)


@dataclass(frozen=True, slots=True)
class Viewport:
    width: int = 80
    height: int = 24

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"viewport must be at least 1x1, got {self.width}x{self.height}"
            )


@dataclass(frozen=True, slots=True)
class VisualRow:
    """One rendered row: which line it belongs to and which segment it is."""

    line: int
    segment: int
    text: str


class WrapMapper:
    """Stateless coordinate conversions for a fixed wrap width."""

    def __init__(self, width: int) -> None:
        if width < 1:
            raise ValueError("wrap width must be positive")
        self.width = width

    def row_count(self, line: str) -> int:
        if not line:
            return 1
        return -(-len(line) // self.width)

    def total_rows(self, lines: Sequence[str]) -> int:
        return sum(self.row_count(line) for line in lines)

    def first_row_of(self, lines: Sequence[str], index: int) -> int:
        """Absolute visual row where logical line ``index`` begins."""

        _ensure_line_index(index, len(lines))
        return sum(self.row_count(line) for line in lines[:index])

    def logical_line_of(
        self, lines: Sequence[str], absolute_row: int, *, continuation: bool = False
    ) -> int:
        if absolute_row < 0:
            raise OutOfRange(f"visual row {absolute_row} is negative", index=absolute_row)
        if not lines:
            return 0
        target = absolute_row - 1 if continuation and absolute_row > 0 else absolute_row
        covered = 0
        for index, line in enumerate(lines):
            covered += self.row_count(line)
            if covered > target:
                return index
        return len(lines) - 1

    def logical_column_of(
        self,
        lines: Sequence[str],
        absolute_row: int,
        visual_col: int,
        *,
        continuation: bool = False,
    ) -> int:
        if not lines:
            return 0
        line = self.logical_line_of(lines, absolute_row, continuation=continuation)
        segment = absolute_row - self.first_row_of(lines, line)
        return visual_col + segment * self.width

    def visual_position_of(
        self, lines: Sequence[str], line: int, col: int
    ) -> Tuple[int, int]:
        """Absolute ``(row, col)`` for a logical position.

        Recompute this after any mutation: the rows above ``line`` may have
        changed their wrap counts.
        """

        if not lines:
            return (0, 0)
        _ensure_line_index(line, len(lines) - 1)
        if col < 0:
            raise OutOfRange(f"column {col} is negative", index=col)
        return (self.first_row_of(lines, line) + col // self.width, col % self.width)

    def is_continuation(self, line: str, col: int) -> bool:
        """True when ``col`` sits on the row just past a completely full line."""

        return bool(line) and col == len(line) and col % self.width == 0

    def segments(self, line: str) -> List[str]:
        if not line:
            return [""]
        return [line[i : i + self.width] for i in range(0, len(line), self.width)]

    def segment_length(self, line: str, col: int) -> int:
        """Characters on the visual row holding logical column ``col``."""

        segments = self.segments(line)
        index = min(col // self.width, len(segments) - 1)
        return len(segments[index])

    def visual_rows(self, lines: Sequence[str]) -> List[VisualRow]:
        rows: List[VisualRow] = []
        for index, line in enumerate(lines):
            for segment, text in enumerate(self.segments(line)):
                rows.append(VisualRow(line=index, segment=segment, text=text))
        return rows


__all__ = ["Viewport", "VisualRow", "WrapMapper"]
