"""Recoverable failures raised inside the editing engine.

Each error carries the ``status`` code the mode manager reports when it
absorbs the error. ``shown`` errors also put their text on the status line.
"""

from __future__ import annotations

from typing import Sequence


class EngineError(RuntimeError):
    """Base class for recoverable editing-engine failures."""

    status = "error"
    shown = False


class OutOfRange(EngineError, IndexError):
    """Raised when a line or column index falls outside the buffer."""

    status = "out_of_range"

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class NoActiveSnapshot(EngineError):
    """Undo was requested before any snapshot was captured."""

    status = "no_snapshot"
    shown = True

    def __init__(self, message: str = "Already at oldest change") -> None:
        super().__init__(message)


class EmptyRegister(EngineError):
    """Paste was requested with nothing yanked."""

    status = "empty_register"
    shown = True

    def __init__(self, message: str = "Nothing in register") -> None:
        super().__init__(message)


class UnresolvedCommand(EngineError):
    """A key sequence matched no command."""

    status = "unresolved"

    def __init__(self, keys: Sequence[str]) -> None:
        super().__init__(f"Unresolved command '{''.join(keys)}'")
        self.keys = tuple(keys)


__all__ = [
    "EngineError",
    "OutOfRange",
    "NoActiveSnapshot",
    "EmptyRegister",
    "UnresolvedCommand",
]
