"""Mode manager and the per-mode key dispatch state machines."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeName, ModeResult
from .keymap_helpers import KeymapMode
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .command_mode import CommandMode
from .visual_mode import VisualCharMode, VisualLineMode
from .replace_mode import ReplaceCharMode
from .mode_manager import ModeManager

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeName",
    "ModeResult",
    "KeymapMode",
    "NormalMode",
    "InsertMode",
    "CommandMode",
    "VisualLineMode",
    "VisualCharMode",
    "ReplaceCharMode",
    "ModeManager",
]
