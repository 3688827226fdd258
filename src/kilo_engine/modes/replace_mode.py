"""Replace-char mode: the key after ``r`` overwrites characters."""

from __future__ import annotations

from kilo_engine.actions import edit as edit_actions

from .base_mode import KeyInput, ModeName, ModeResult
from .keymap_helpers import KeymapMode


class ReplaceCharMode(KeymapMode):
    name = ModeName.REPLACE_CHAR.value

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.extras.pop("replace_count", None)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self.dispatch(key)
        if result is not None:
            return result

        text = key.printable
        if text is None or len(text) != 1:
            return ModeResult(
                consumed=True, switch_to=ModeName.NORMAL.value, status="cancel"
            )
        count = int(self.context.extras.get("replace_count", 1))  # type: ignore[arg-type]
        return edit_actions.replace_chars(self.context, text, count)
