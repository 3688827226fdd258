"""Key-sequence lookup: one trie per mode, rebuilt when the registry changes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence, Tuple

from kilo_engine.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    binding_id: Optional[str] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def insert(self, tokens: Sequence[str], binding_id: str) -> None:
        node = self
        for token in tokens:
            node = node.children.setdefault(token, TrieNode())
        node.binding_id = binding_id

    def walk(self, tokens: Sequence[str]) -> Tuple[Optional["TrieNode"], int]:
        """Follow ``tokens``; returns the reached node (``None`` on a dead end)
        and how many tokens were accepted."""

        node = self
        for depth, token in enumerate(tokens):
            child = node.children.get(token)
            if child is None:
                return None, depth
            node = child
        return node, len(tokens)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """``match`` runs a binding; ``pending`` means the keys are a strict prefix
    of at least one binding and more input is needed; ``miss`` means nothing
    starts with them."""

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, TrieNode] = {}
        self._built_at = -1

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        keys = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "keys": " ".join(keys)},
        ) as handle:
            result = self._classify(*self._trie(mode).walk(keys))
            handle.add_metadata("status", result.status)
            return result

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._tries.clear()
        else:
            self._tries.pop(mode, None)

    def _classify(self, node: Optional[TrieNode], consumed: int) -> ResolutionResult:
        if node is None or consumed == 0:
            return ResolutionResult(status="miss", consumed=consumed)
        if node.binding_id is not None:
            binding = self._registry.get_binding(node.binding_id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(
                    binding=binding, action=self._registry.get_action(binding.action_id)
                ),
                consumed=consumed,
            )
        return ResolutionResult(
            status="pending",
            consumed=consumed,
            next_expected=tuple(sorted(node.children)),
        )

    def _trie(self, mode: str) -> TrieNode:
        revision = self._registry.revision()
        if revision != self._built_at:
            self._tries.clear()
            self._built_at = revision
        root = self._tries.get(mode)
        if root is None:
            root = TrieNode()
            for binding in self._registry.iter_bindings(mode):
                root.insert(binding.sequence.tokens, binding.id)
            self._tries[mode] = root
        return root


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "TrieNode",
]
