"""Textual adapter that wires Engine render states and bus events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from kilo_engine.buffer import RenderState
from kilo_engine.engine import Engine
from kilo_engine.layout import WrapMapper
from kilo_engine.modes import KeyInput
from kilo_engine.runtime import telemetry

TEXTUAL_KEY_NAMES: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
    "pageup": "PAGE_UP",
    "pagedown": "PAGE_DOWN",
    "tab": "TAB",
}

HOST_EVENTS = (
    "visual.selection",
    "visual.yank",
    "visual.delete",
    "command.start",
    "command.end",
    "command.submit",
    "command.write",
    "command.quit",
    "command.error",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def translate_key(key: str, character: Optional[str] = None) -> Optional[KeyInput]:
    """Map a Textual key name (``"ctrl+b"``, ``"escape"``, ``"x"``) to a KeyInput.

    Returns ``None`` for keys the engine has no use for.
    """

    if key in TEXTUAL_KEY_NAMES:
        return KeyInput(key=TEXTUAL_KEY_NAMES[key])
    if key.startswith("ctrl+") and len(key) > len("ctrl+"):
        return KeyInput(key=key[len("ctrl+") :], modifiers=("ctrl",))
    if character and len(character) == 1 and character.isprintable():
        return KeyInput(key=character, text=character)
    return None


def visible_rows(state: RenderState) -> List[str]:
    """Wrapped rows of ``state`` that fit the viewport, padded with ``~``."""

    width, height = state.viewport
    rows = [row.text for row in WrapMapper(width).visual_rows(state.lines)]
    window = rows[state.row_offset : state.row_offset + height]
    return window + ["~"] * (height - len(window))


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[RenderState], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop


class TextualEngineAdapter:
    """Bridges Engine + bus events to a Textual-friendly surface."""

    def __init__(self, engine: Engine, hooks: TextualUIHooks) -> None:
        self.engine = engine
        self.hooks = hooks
        self.logger = telemetry.get_logger("kilo_engine.adapters.textual")
        self._subscribe_events()
        self._publish(engine.render())

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[RenderState]:
        """Translate a Textual key event and dispatch it to the engine."""

        event = translate_key(key, character)
        if event is None:
            self.logger.debug(f"Ignoring host key {key!r}")
            return None
        state = self.engine.handle_key(event)
        self._publish(state)
        return state

    def load(self, lines: List[str], *, file_name: Optional[str] = None) -> RenderState:
        state = self.engine.load_text(lines, file_name=file_name)
        self._publish(state)
        return state

    def resize(self, width: int, height: int) -> RenderState:
        state = self.engine.set_viewport(width, height)
        self._publish(state)
        return state

    def _publish(self, state: RenderState) -> None:
        self.hooks.update_view(state)
        self.hooks.update_status(self._status_line(state))
        self.hooks.show_command(state.command_line)

    @staticmethod
    def _status_line(state: RenderState) -> str:
        line, col = state.logical_cursor
        name = state.attributes.get("file_name") or "[No Name]"
        modified = " [+]" if state.dirty else ""
        parts = [state.status or f"{name}{modified}"]
        if state.pending:
            parts.append(state.pending)
        parts.append(f"{line + 1},{col + 1}")
        return "  ".join(parts)

    def _subscribe_events(self) -> None:
        bus = self.engine.bus
        for event in HOST_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self.hooks.handle_event(name, payload)
            )


__all__ = [
    "TextualEngineAdapter",
    "TextualUIHooks",
    "translate_key",
    "visible_rows",
]
