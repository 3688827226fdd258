"""Engine facade: one editing session driven by key events."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Union

from kilo_engine.buffer import Buffer, RenderState
from kilo_engine.config import EngineConfig
from kilo_engine.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from kilo_engine.modes import (
    CommandMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    NormalMode,
    ReplaceCharMode,
    VisualCharMode,
    VisualLineMode,
)
from kilo_engine.runtime import telemetry

KeyEvent = Union[KeyInput, str]


class Engine:
    """Owns the buffer, the mode state machines, and the status line.

    Hosts feed key events to :meth:`handle_key` and draw the returned
    :class:`RenderState`. Writes and quits are published on :attr:`bus` as
    ``command.write`` and ``command.quit``.
    """

    def __init__(
        self,
        lines: Iterable[str] = (),
        *,
        file_name: Optional[str] = None,
        config: Optional[EngineConfig] = None,
        registry: Optional[KeymapRegistry] = None,
        bus: Optional[ModeBus] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.buffer = Buffer.from_lines(lines, config=self.config, file_name=file_name)
        self.bus = bus or ModeBus()
        if registry is None:
            registry = KeymapRegistry(logger_name="kilo_engine.keymaps")
            load_default_keymaps(registry)
        self.context = ModeContext(
            buffer=self.buffer, registers=self.buffer.registers, bus=self.bus
        )
        self.modes = ModeManager(
            self.context,
            keymap_registry=registry,
            keymap_resolver=KeymapResolver(registry, logger_name="kilo_engine.keymaps"),
        )
        for mode_cls in (
            NormalMode,
            InsertMode,
            CommandMode,
            VisualLineMode,
            VisualCharMode,
            ReplaceCharMode,
        ):
            self.modes.register_mode(mode_cls)
        self.status = ""
        self.last_result: Optional[ModeResult] = None
        self.logger = telemetry.get_logger("kilo_engine.engine")

    @property
    def mode(self) -> str:
        return self.modes.active_name

    def handle_key(self, event: KeyEvent) -> RenderState:
        key = KeyInput.parse(event) if isinstance(event, str) else event
        result = self.modes.handle_key(key)
        self.last_result = result
        if result.message is not None:
            self.status = result.message
        return self.render()

    def feed(self, keys: Iterable[KeyEvent]) -> RenderState:
        """Handle several keys in order; ``"3dd"`` feeds three keys."""

        state = self.render()
        for key in keys:
            state = self.handle_key(key)
        return state

    def load_text(
        self, lines: Sequence[str], *, file_name: Optional[str] = None
    ) -> RenderState:
        if self.mode != "normal":
            self.modes.switch_mode("normal")
        self.buffer.load(lines, file_name=file_name)
        self.status = ""
        telemetry.record_event(
            "buffer.load",
            data={"lines": len(lines), "file_name": file_name or ""},
        )
        return self.render()

    def serialize_text(self) -> Sequence[str]:
        return tuple(self.buffer.lines)

    def set_viewport(self, width: int, height: int) -> RenderState:
        self.buffer.set_viewport(width, height)
        if self.mode != "insert":
            self.buffer.clamp_cursor()
        return self.render()

    def render(self) -> RenderState:
        buffer = self.buffer
        state = buffer.state
        command_state = self.context.extras.get("command_state")
        command_line = ""
        if self.mode == "command" and isinstance(command_state, dict):
            command_line = ":" + str(command_state.get("text", ""))
        return RenderState(
            lines=tuple(buffer.lines),
            cursor=state.cursor,
            row_offset=state.row_offset,
            logical_cursor=buffer.logical_cursor(),
            mode=self.mode,
            status=self.status,
            highlight=state.highlight,
            pending=state.pending.text,
            command_line=command_line,
            dirty=bool(buffer.document.dirty),
            quit_requested=state.quit_requested,
            viewport=(buffer.viewport.width, buffer.viewport.height),
            attributes={
                "file_name": buffer.file_name or "",
                "smart_indent": "on" if buffer.smart_indent else "off",
            },
        )


__all__ = ["Engine", "KeyEvent"]
