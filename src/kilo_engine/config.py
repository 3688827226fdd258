"""Engine settings with ``KILO_ENGINE_*`` environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "KILO_ENGINE_"


def _env(
    name: str, environ: Mapping[str, str], default: Optional[str] = None
) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, environ: Mapping[str, str], default: bool) -> bool:
    raw = _env(name, environ)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, environ: Mapping[str, str], default: int) -> int:
    raw = _env(name, environ)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(slots=True)
class EngineConfig:
    indent_width: int = 4
    smart_indent: bool = True
    viewport_width: int = 80
    viewport_height: int = 24
    quit_refused_message: str = "No write since last change"
    quit_times: int = 1

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            indent_width=_env_int("INDENT", env, defaults.indent_width),
            smart_indent=_env_flag("SMARTINDENT", env, defaults.smart_indent),
            viewport_width=_env_int("WIDTH", env, defaults.viewport_width),
            viewport_height=_env_int("HEIGHT", env, defaults.viewport_height),
            quit_times=_env_int("QUIT_TIMES", env, defaults.quit_times),
        )


__all__ = ["EngineConfig", "ENV_PREFIX"]
