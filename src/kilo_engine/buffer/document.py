"""Line storage for kilo_engine buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from kilo_engine.errors import OutOfRange

from .validation import clamp, ensure_index


@dataclass(slots=True)
class LineBuffer:
    """Ordered, index-addressed list of logical lines.

    An instance with zero lines is the "empty document" state and is distinct
    from a document holding a single empty line. Mutators renumber every line
    that follows the one they touch.
    """

    _lines: List[str] = field(default_factory=list)
    dirty: int = 0

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "LineBuffer":
        return cls(_lines=[str(line) for line in lines])

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def load(self, lines: Iterable[str]) -> None:
        """Replace every line; used by file loading and undo restore."""

        self._lines = [str(line) for line in lines]

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, index: int) -> str:
        ensure_index(index, len(self._lines) - 1)
        return self._lines[index]

    def line_length(self, index: int) -> int:
        if not self._lines:
            return 0
        return len(self.get_line(index))

    def mark_clean(self) -> None:
        self.dirty = 0

    def insert_line(self, index: int, content: str = "") -> None:
        ensure_index(index, len(self._lines))
        self._lines.insert(index, content)
        self.dirty += 1

    def delete_line(self, index: int) -> str:
        """Remove and return a line; the last line drains the document to N=0."""

        if not self._lines:
            raise OutOfRange("cannot delete from an empty document", index=index)
        ensure_index(index, len(self._lines) - 1)
        removed = self._lines.pop(index)
        self.dirty += 1
        return removed

    def replace_line(self, index: int, content: str) -> None:
        ensure_index(index, len(self._lines) - 1)
        self._lines[index] = content
        self.dirty += 1

    def append_to_line(self, index: int, content: str) -> None:
        ensure_index(index, len(self._lines) - 1)
        self._lines[index] += content
        self.dirty += 1

    def split_line(self, index: int, col: int) -> None:
        """Move everything from ``col`` onward onto a new line below ``index``."""

        line = self.get_line(index)
        col = clamp(col, 0, len(line))
        self._lines[index] = line[:col]
        self._lines.insert(index + 1, line[col:])
        self.dirty += 1

    def insert_char(self, line: int, col: int, ch: str) -> None:
        self._ensure_line()
        text = self.get_line(line)
        col = clamp(col, 0, len(text))
        self._lines[line] = text[:col] + ch + text[col:]
        self.dirty += 1

    def insert_text(self, line: int, col: int, text: str) -> None:
        if not text:
            return
        self.insert_char(line, col, text)

    def delete_char(self, line: int, col: int) -> str:
        """Delete the character at ``col``; returns ``""`` past the end."""

        self._ensure_line()
        text = self.get_line(line)
        if col < 0 or col >= len(text):
            return ""
        removed = text[col]
        self._lines[line] = text[:col] + text[col + 1 :]
        self.dirty += 1
        return removed

    def delete_span(self, line: int, start: int, count: int) -> str:
        """Delete up to ``count`` characters from ``start``; returns them."""

        text = self.get_line(line)
        start = clamp(start, 0, len(text))
        end = clamp(start + max(count, 0), start, len(text))
        if end == start:
            return ""
        self._lines[line] = text[:start] + text[end:]
        self.dirty += 1
        return text[start:end]

    def indent_amount(self, index: int) -> int:
        """Number of leading spaces on a line (0 for the empty document)."""

        if not self._lines:
            return 0
        text = self.get_line(index)
        return len(text) - len(text.lstrip(" "))

    def _ensure_line(self) -> None:
        if not self._lines:
            self._lines.append("")
            self.dirty += 1


__all__ = ["LineBuffer"]
