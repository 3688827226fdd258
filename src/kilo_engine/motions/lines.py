"""Line-oriented motions: line ends, indentation, vertical moves, jumps."""

from __future__ import annotations

from typing import Sequence, Tuple

from kilo_engine.buffer.validation import clamp
from kilo_engine.layout import WrapMapper

Position = Tuple[int, int]


def line_start(lines: Sequence[str], line: int) -> Position:
    return (line, 0)


def line_end(lines: Sequence[str], line: int) -> Position:
    if not lines:
        return (0, 0)
    return (line, max(len(lines[line]) - 1, 0))


def indent_amount(text: str) -> int:
    return len(text) - len(text.lstrip(" "))


def first_non_blank(lines: Sequence[str], line: int) -> Position:
    if not lines:
        return (0, 0)
    return (line, indent_amount(lines[line]))


def vertical(
    lines: Sequence[str],
    line: int,
    col: int,
    delta: int,
    mapper: WrapMapper,
    *,
    insert: bool = False,
) -> Position:
    """``j``/``k``: land on the first visual row of another logical line.

    The visual column is kept and clamped to the characters on that row.
    Moving past either end of the document leaves the cursor where it is.
    """

    if not lines:
        return (0, 0)
    target = clamp(line + delta, 0, len(lines) - 1)
    if target == line:
        return (line, col)
    text = lines[target]
    row_chars = mapper.segment_length(text, 0)
    if insert and row_chars < mapper.width:
        limit = row_chars
    else:
        limit = row_chars - 1
    return (target, clamp(col % mapper.width, 0, max(limit, 0)))


def document_end(lines: Sequence[str]) -> Position:
    return (max(len(lines) - 1, 0), 0)


def goto_line(lines: Sequence[str], number: int) -> Position:
    """``gg`` with a count: 1-based line ``number``, clamped to the document."""

    return (clamp(number - 1, 0, max(len(lines) - 1, 0)), 0)


__all__ = [
    "line_start",
    "line_end",
    "indent_amount",
    "first_non_blank",
    "vertical",
    "document_end",
    "goto_line",
]
