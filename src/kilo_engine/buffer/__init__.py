"""Line storage, session state, registers, and single-level undo."""

from .buffer import Buffer, Position, Transaction
from .document import LineBuffer
from .registers import RegisterBank, RegisterValue
from .state import BufferState, Cursor, Highlight, PendingCommand
from .sync import RenderState
from .undo import UndoSnapshot
from .validation import clamp, ensure_index

__all__ = [
    "Buffer",
    "BufferState",
    "Cursor",
    "Highlight",
    "LineBuffer",
    "PendingCommand",
    "Position",
    "RegisterBank",
    "RegisterValue",
    "RenderState",
    "Transaction",
    "UndoSnapshot",
    "clamp",
    "ensure_index",
]
