"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import Optional

from kilo_engine.keymaps.resolver import KeymapResolver, ResolutionMatch
from kilo_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    return key.token


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={
            "binding_id": match.binding.id,
            "action": match.action.id,
            "mutates": match.action.mutates,
        },
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True)


class KeymapMode(Mode):
    """Mode that resolves keys against its own bindings before falling back.

    Keys typed toward a multi-key binding accumulate in the buffer's pending
    command. When the next key cannot extend them, the stale keys are
    dropped and the new key is resolved on its own, so ``d`` followed by
    ``j`` simply moves down.
    """

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"kilo_engine.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)

    def dispatch(self, key: KeyInput) -> Optional[ModeResult]:
        """Run the bound action, or return ``None`` when nothing is bound."""

        token = key_to_token(key)
        keys = self.context.pending.keys
        result = self._resolver.resolve(self.name, (*keys, token))
        if result.status == "miss" and keys:
            self.logger.debug(f"Discarding pending keys {keys!r} before {token!r}")
            keys.clear()
            result = self._resolver.resolve(self.name, (token,))

        if result.status == "match" and result.match:
            try:
                return execute_match(self.context, result.match)
            finally:
                self.context.pending.reset()

        if result.status == "pending":
            keys.append(token)
            return ModeResult(consumed=True, status="pending")

        return None


__all__ = [
    "KeymapMode",
    "execute_match",
    "key_to_token",
    "require_keymap_resolver",
]
