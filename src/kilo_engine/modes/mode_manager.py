"""Active-mode bookkeeping and key routing for the editor modes."""

from __future__ import annotations

from typing import Dict, Optional, Type

from kilo_engine.errors import EngineError
from kilo_engine.keymaps.registry import KeymapRegistry
from kilo_engine.keymaps.resolver import KeymapResolver
from kilo_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


class ModeManager:
    """Owns active mode, handles transitions, and dispatches key events.

    Recoverable engine errors raised while a key is handled are logged and
    reported through the returned ``ModeResult``; they never reach the host.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("kilo_engine.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="kilo_engine.keymaps"
        )
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="kilo_engine.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def active_name(self) -> str:
        return self._active or ""

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        self.context.bus.emit("mode.switch", name)
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"mode": name, "previous": previous.name if previous else None},
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.token, "mode": mode.name},
        ):
            try:
                result = mode.handle_key(key)
            except EngineError as exc:
                result = self._recover(mode, exc)
        return self._after_mode_result(result)

    def _recover(self, mode: Mode, exc: EngineError) -> ModeResult:
        telemetry.record_recovery(exc, where=f"mode::{mode.name}")
        self.context.pending.reset()
        return ModeResult(
            consumed=True,
            status=exc.status,
            message=str(exc) if exc.shown else None,
        )

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


__all__ = ["ModeManager"]
