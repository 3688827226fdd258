"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from kilo_engine.buffer import Buffer, PendingCommand, RegisterBank
from kilo_engine.keymaps.models import make_token, normalize_modifiers

KEY_ALIASES: Dict[str, str] = {
    "<Esc>": "ESC",
    "ESCAPE": "ESC",
    "RETURN": "ENTER",
    "<CR>": "ENTER",
    "<BS>": "BACKSPACE",
    "DEL": "DELETE",
    "ARROW_LEFT": "LEFT",
    "ARROW_RIGHT": "RIGHT",
    "ARROW_UP": "UP",
    "ARROW_DOWN": "DOWN",
    "PAGEUP": "PAGE_UP",
    "PAGEDOWN": "PAGE_DOWN",
}


class ModeName(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"
    VISUAL_LINE = "visual_line"
    VISUAL_CHAR = "visual_char"
    REPLACE_CHAR = "replace_char"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is a single character for printable keys or an upper-case name
    (``ESC``, ``ENTER``, ``BACKSPACE``, ``LEFT`` ...) for special keys.
    ``text`` carries the characters a printable key would insert.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        self.key = KEY_ALIASES.get(self.key, self.key)
        self.modifiers = normalize_modifiers(self.modifiers)
        if self.text is None and len(self.key) == 1 and not self.modifiers:
            self.text = self.key

    @classmethod
    def parse(cls, value: str) -> "KeyInput":
        """Build a key from ``"x"``, ``"ESC"`` or ``"ctrl+b"`` notation."""

        if len(value) > 1 and "+" in value:
            *modifiers, key = value.split("+")
            return cls(key=key or "+", modifiers=tuple(modifiers))
        return cls(key=value)

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)

    @property
    def printable(self) -> Optional[str]:
        if self.modifiers and set(self.modifiers) & {"ctrl", "alt", "meta"}:
            return None
        if self.text and self.text.isprintable():
            return self.text
        return None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``.

    ``status`` is a machine-readable outcome; ``message`` replaces the status
    line shown to the user when it is not ``None``.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    buffer: Buffer
    registers: RegisterBank
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def pending(self) -> PendingCommand:
        return self.buffer.state.pending


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
