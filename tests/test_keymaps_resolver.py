from __future__ import annotations

from kilo_engine.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "normal",
    keys: tuple[str, ...] = ("g", "g"),
    action_id: str = "core.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("normal.gg")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("g", "g"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "core.test"


def test_resolver_reports_pending_for_prefix() -> None:
    registry = build_registry(
        [
            make_binding("normal.dd", keys=("d", "d")),
            make_binding("normal.dw", keys=("d", "w")),
        ]
    )
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("d",))

    assert result.status == "pending"
    assert result.next_expected == ("d", "w")


def test_resolver_misses_unknown_continuation() -> None:
    registry = build_registry([make_binding("normal.dd", keys=("d", "d"))])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("d", "j"))

    assert result.status == "miss"
    assert result.consumed == 1


def test_resolver_keeps_modes_apart() -> None:
    registry = build_registry([make_binding("insert.gg", mode="insert")])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("normal", ("g", "g")).status == "miss"
    assert resolver.resolve("insert", ("g", "g")).status == "match"


def test_resolver_treats_empty_sequence_as_miss() -> None:
    registry = build_registry([make_binding("normal.gg")])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("normal", ()).status == "miss"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("normal", ("x",))
    assert miss.status == "miss"

    new_binding = make_binding("normal.x", keys=("x",), action_id="core.x")
    registry.register_action(make_action("core.x"))
    registry.register_binding(new_binding)

    match = resolver.resolve("normal", ("x",))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id

    registry.unregister_binding("normal.x")
    assert resolver.resolve("normal", ("x",)).status == "miss"
