"""Visual line and visual char modes built on the keymap resolver."""

from __future__ import annotations

from .base_mode import KeyInput, ModeName, ModeResult
from .keymap_helpers import KeymapMode


class _HighlightMode(KeymapMode):
    """Shared enter/exit handling: the highlight lives only while active."""

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.pending.reset()
        anchor = self._anchor()
        self.context.buffer.state.set_highlight(anchor, anchor)
        self.context.bus.emit("visual.start", {"mode": self.name, "anchor": anchor})

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.pending.reset()
        self.context.buffer.state.clear_highlight()

    def _anchor(self) -> int:  # pragma: no cover - abstract override
        raise NotImplementedError

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self.dispatch(key)
        if result is not None:
            return result
        return ModeResult(consumed=True, status="ignored")


class VisualLineMode(_HighlightMode):
    name = ModeName.VISUAL_LINE.value

    def _anchor(self) -> int:
        return self.context.buffer.logical_cursor()[0]


class VisualCharMode(_HighlightMode):
    name = ModeName.VISUAL_CHAR.value

    def _anchor(self) -> int:
        return self.context.buffer.logical_cursor()[1]
