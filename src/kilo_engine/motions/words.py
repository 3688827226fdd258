"""Word motions over logical coordinates.

Characters are classified coarsely: anything with a code point of 48 ("0")
or above is a word character, everything below is a separator. This keeps
punctuation such as ``.`` and ``,`` as separators but treats ``:`` or ``_``
as part of a word, which is the long-standing behaviour of the editor.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

Position = Tuple[int, int]

WORD_THRESHOLD = 48


def is_word_char(ch: str) -> bool:
    return ord(ch) >= WORD_THRESHOLD


def _next_nonempty(lines: Sequence[str], line: int) -> Optional[int]:
    """Index of the next non-empty line, the last line if all are empty,
    or ``None`` when ``line`` is already the last one."""

    if line >= len(lines) - 1:
        return None
    while True:
        line += 1
        if lines[line] or line == len(lines) - 1:
            return line


def _previous_nonempty(lines: Sequence[str], line: int) -> Optional[int]:
    if line <= 0:
        return None
    while True:
        line -= 1
        if lines[line] or line == 0:
            return line


def next_word_start(lines: Sequence[str], line: int, col: int) -> Position:
    """``w``: start of the next word, continuing onto later non-empty lines."""

    if not lines:
        return (0, 0)
    text = lines[line]
    if col < len(text) and not is_word_char(text[col]):
        j = col
    else:
        j = col + 1
        while j < len(text) and is_word_char(text[j]):
            j += 1

    if j >= len(text) - 1:
        target = _next_nonempty(lines, line)
        if target is None:
            return (line, col)
        text = lines[target]
        line = target
        if not text or is_word_char(text[0]):
            return (line, 0)
        j = 0

    while j < len(text) and not is_word_char(text[j]):
        j += 1
    if j >= len(text):
        # Only separators remain on this line.
        return next_word_start(lines, line, len(text) - 1)
    return (line, j)


def previous_word_start(lines: Sequence[str], line: int, col: int) -> Position:
    """``b``: start of the current or previous word."""

    if not lines:
        return (0, 0)
    text = lines[line]
    col = min(col, len(text))
    if col == 0:
        target = _previous_nonempty(lines, line)
        if target is None:
            return (line, 0)
        line = target
        text = lines[line]
        if not text:
            return (line, 0)
        col = len(text) - 1

    j = col
    while j > 0 and not is_word_char(text[j - 1]):
        j -= 1
    if j == 0:
        return (line, 0)

    i = j - 1
    while i >= 0 and is_word_char(text[i]):
        i -= 1
    return (line, i + 1)


def next_word_end(lines: Sequence[str], line: int, col: int) -> Position:
    """``e``: end of the current or next word."""

    if not lines:
        return (0, 0)
    text = lines[line]
    start = col
    if col >= len(text) - 1:
        target = _next_nonempty(lines, line)
        if target is None:
            return (line, col)
        line = target
        text = lines[line]
        if not text:
            return (line, 0)
        start = -1

    j = start + 1
    while j < len(text) and not is_word_char(text[j]):
        j += 1
    if j >= len(text):
        return next_word_end(lines, line, len(text) - 1)

    j += 1
    while j < len(text) and is_word_char(text[j]):
        j += 1
    return (line, j - 1)


def current_word_end(text: str, col: int) -> int:
    """End of the word under ``col``, staying put when already on its end."""

    j = col + 1
    while j < len(text) and is_word_char(text[j]):
        j += 1
    return j - 1


def word_bounds(text: str, col: int) -> Optional[Tuple[int, int]]:
    """``(start, end)`` of the word under ``col``, end exclusive."""

    if col < 0 or col >= len(text) or not is_word_char(text[col]):
        return None
    i = col - 1
    while i >= 0 and is_word_char(text[i]):
        i -= 1
    j = col + 1
    while j < len(text) and is_word_char(text[j]):
        j += 1
    return (i + 1, j)


def word_under_cursor(text: str, col: int) -> str:
    bounds = word_bounds(text, col)
    if bounds is None:
        return ""
    return text[bounds[0] : bounds[1]]


__all__ = [
    "WORD_THRESHOLD",
    "is_word_char",
    "next_word_start",
    "previous_word_start",
    "next_word_end",
    "current_word_end",
    "word_bounds",
    "word_under_cursor",
]
