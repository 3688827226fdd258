"""Action and binding storage shared by every editor mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from kilo_engine.runtime.telemetry import span

from .models import ActionRef, Binding

KeysSlot = Tuple[str, str]  # (mode, key signature)


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A binding reuses keys that another binding already owns in its mode."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        owners = ", ".join(existing.id for existing in self.conflicts)
        super().__init__(
            f"Binding '{binding.id}' ({binding.mode}: {binding.key_signature}) "
            f"is already bound by {owners}"
        )


class KeymapRegistry:
    """Actions by id, bindings by id, and one owner per ``(mode, keys)`` slot.

    Every change to the bindings bumps :meth:`revision`, which resolvers use
    to rebuild their tries lazily.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[KeysSlot, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; ``replace`` evicts whatever owned its id or keys."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            owner = self.detect_conflict(binding)
            if not replace:
                if owner is not None:
                    handle.add_metadata("conflicts", owner.id)
                    raise KeymapConflictError(binding, (owner,))
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
            else:
                for stale in (owner, self._bindings.get(binding.id)):
                    if stale is not None:
                        self._drop(stale)

            self._bindings[binding.id] = binding
            self._slots[self._slot(binding)] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is not None:
            self._drop(binding)
            self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted({mode for mode, _ in self._slots})),
        )

    def detect_conflict(self, binding: Binding) -> Optional[Binding]:
        owner = self._slots.get(self._slot(binding))
        if owner is None or owner == binding.id:
            return None
        return self._bindings[owner]

    @staticmethod
    def _slot(binding: Binding) -> KeysSlot:
        return (binding.mode, binding.key_signature)

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        slot = self._slot(binding)
        if self._slots.get(slot) == binding.id:
            del self._slots[slot]


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
