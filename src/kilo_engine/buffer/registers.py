"""Yank/paste storage for whole lines and character spans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(slots=True)
class RegisterValue:
    text: str = ""
    lines: Tuple[str, ...] = ()

    @property
    def type(self) -> str:
        if self.text:
            return "character"
        if self.lines:
            return "line"
        return "empty"


class RegisterBank:
    """Tracks the line register and the string register.

    The two are mutually exclusive from the point of view of paste: an empty
    string register means "paste lines".
    """

    def __init__(self) -> None:
        self._lines: Tuple[str, ...] = ()
        self._text: str = ""

    @property
    def lines(self) -> Tuple[str, ...]:
        return self._lines

    @property
    def text(self) -> str:
        return self._text

    def has_text(self) -> bool:
        return bool(self._text)

    def has_lines(self) -> bool:
        return bool(self._lines)

    def is_empty(self) -> bool:
        return not self._text and not self._lines

    def get(self) -> RegisterValue:
        return RegisterValue(text=self._text, lines=self._lines)

    def yank_lines(self, lines: Sequence[str], start: int, count: int) -> int:
        """Copy ``count`` lines from ``start``; returns how many were copied."""

        start = max(start, 0)
        taken = tuple(lines[start : start + max(count, 0)])
        self._lines = taken
        self._text = ""
        return len(taken)

    def yank_span(self, line: str, start: int, end: int) -> str:
        """Copy the inclusive column range ``start..end`` of ``line``."""

        if start > end:
            start, end = end, start
        start = max(start, 0)
        self._text = line[start : end + 1]
        return self._text

    def clear(self) -> None:
        self._lines = ()
        self._text = ""


__all__ = ["RegisterBank", "RegisterValue"]
