"""Single-level undo built on full buffer snapshots."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple


class UndoSnapshot:
    """Holds one full copy of the lines, overwritten on every capture.

    Not a history: each mutating command, and each insert-mode keystroke,
    replaces the previous copy, so ``u`` always returns to the state before
    the most recent change.
    """

    def __init__(self) -> None:
        self._lines: Optional[Tuple[str, ...]] = None

    @property
    def has_snapshot(self) -> bool:
        return self._lines is not None

    def capture(self, lines: Sequence[str]) -> bool:
        """Copy ``lines``; an empty document never overwrites a prior copy."""

        if not lines:
            return False
        self._lines = tuple(lines)
        return True

    def restore(self) -> Optional[Tuple[str, ...]]:
        """Return the captured lines, or ``None`` when nothing was captured."""

        return self._lines

    def clear(self) -> None:
        self._lines = None


__all__ = ["UndoSnapshot"]
