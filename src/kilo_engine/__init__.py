"""Modal, wrap-aware line editing engine."""

from .buffer import Buffer, RenderState
from .config import EngineConfig
from .keymaps import KeymapRegistry, load_default_keymaps
from .modes import KeyInput, ModeResult
from .engine import Engine

__all__ = [
    "Buffer",
    "Engine",
    "EngineConfig",
    "KeyInput",
    "KeymapRegistry",
    "ModeResult",
    "RenderState",
    "load_default_keymaps",
]

__version__ = "0.1.0"
