"""Bounds helpers shared across buffer services."""

from __future__ import annotations

from kilo_engine.errors import OutOfRange


def ensure_index(index: int, upper: int, *, what: str = "line") -> int:
    """Return ``index`` if ``0 <= index <= upper`` else raise ``OutOfRange``."""

    if index < 0 or index > upper:
        raise OutOfRange(f"{what} {index} out of range 0..{upper}", index=index)
    return index


def clamp(value: int, lower: int, upper: int) -> int:
    if upper < lower:
        return lower
    return max(lower, min(value, upper))


__all__ = ["ensure_index", "clamp"]
