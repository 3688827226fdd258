"""Normal mode: counts, single-key commands, and multi-key sequences."""

from __future__ import annotations

from kilo_engine.errors import UnresolvedCommand

from .base_mode import KeyInput, ModeName, ModeResult
from .keymap_helpers import KeymapMode


class NormalMode(KeymapMode):
    name = ModeName.NORMAL.value

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.pending.reset()
        self.context.buffer.clamp_cursor()

    def handle_key(self, key: KeyInput) -> ModeResult:
        pending = self.context.pending
        if self._is_count_digit(key):
            pending.push_digit(int(key.key))
            return ModeResult(consumed=True, status="count")

        result = self.dispatch(key)
        if result is not None:
            return result

        keys = [*pending.keys, key.token]
        pending.reset()
        raise UnresolvedCommand(keys)

    def _is_count_digit(self, key: KeyInput) -> bool:
        """A bare ``0`` is the line-start motion unless a count is under way."""

        if key.modifiers or len(key.key) != 1 or not key.key.isdigit():
            return False
        return key.key != "0" or self.context.pending.count is not None
