"""Command-line mode with inline editing and keymap integration."""

from __future__ import annotations

from kilo_engine.actions import command as command_actions

from .base_mode import KeyInput, ModeName, ModeResult
from .keymap_helpers import KeymapMode


class CommandMode(KeymapMode):
    name = ModeName.COMMAND.value

    def on_enter(self, previous: str | None) -> None:
        del previous
        command_actions.command_state(self.context)["text"] = ""
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.pending.reset()
        self.context.bus.emit("command.end", self.current_command)
        command_actions.command_state(self.context)["text"] = ""

    @property
    def current_command(self) -> str:
        return str(command_actions.command_state(self.context).get("text", ""))

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self.dispatch(key)
        if result is not None:
            return result

        text = key.printable
        if text:
            return command_actions.append_command_text(self.context, text)
        return ModeResult(consumed=False, status="miss", message=None)
