"""Forward substring search with wrap-around."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

Position = Tuple[int, int]


def find_next(
    lines: Sequence[str], line: int, col: int, needle: str
) -> Optional[Position]:
    """First match after ``(line, col)``, wrapping past the last line.

    The starting line is searched again from column 0 after wrapping, so a
    lone match under the cursor is found again. ``None`` means no match.
    """

    if not needle or not lines:
        return None
    count = len(lines)
    y, x = line, col + 1
    for _ in range(count + 1):
        index = lines[y].find(needle, x)
        if index != -1:
            return (y, index)
        y = (y + 1) % count
        x = 0
    return None


__all__ = ["find_next"]
