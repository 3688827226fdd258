"""Insert mode: bound editing keys, everything printable is typed."""

from __future__ import annotations

from kilo_engine.actions import insert as insert_actions

from .base_mode import KeyInput, ModeName, ModeResult
from .keymap_helpers import KeymapMode

QUIT_KEY = "ctrl+q"


class InsertMode(KeymapMode):
    name = ModeName.INSERT.value

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.pending.reset()
        self.context.buffer.state.quit_warnings = 0

    def handle_key(self, key: KeyInput) -> ModeResult:
        # Quit warnings only count consecutive Ctrl-Q presses.
        if key.token != QUIT_KEY:
            self.context.buffer.state.quit_warnings = 0

        result = self.dispatch(key)
        if result is not None:
            return result

        text = key.printable
        if text:
            return insert_actions.insert_text(self.context, text)
        return ModeResult(consumed=False, status="miss")
