"""Editor configuration threaded through the engine and its collaborators."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "GAPEDIT_"
DEFAULT_PROGRAM_NAME = "gapedit"
DEFAULT_CHUNK_SIZE = 4096
DEFAULT_TAB_WIDTH = 4


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}")


def env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _env(environ, name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(environ: Mapping[str, str], name: str, fallback: int) -> int:
    raw = _env(environ, name)
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value > 0 else fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Session settings; ``program_name`` prefixes every diagnostic."""

    program_name: str = DEFAULT_PROGRAM_NAME
    chunk_size: int = DEFAULT_CHUNK_SIZE
    tab_width: int = DEFAULT_TAB_WIDTH
    log_level: str = "INFO"
    log_file: str = ""
    log_console: bool = False
    log_json: bool = False

    @classmethod
    def from_env(
        cls,
        program_name: str = DEFAULT_PROGRAM_NAME,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "EditorConfig":
        env = os.environ if environ is None else environ
        return cls(
            program_name=program_name or DEFAULT_PROGRAM_NAME,
            chunk_size=env_int(env, "CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
            tab_width=env_int(env, "TAB_WIDTH", DEFAULT_TAB_WIDTH),
            log_level=(_env(env, "LOG_LEVEL") or "INFO").upper(),
            log_file=_env(env, "LOG_FILE") or "",
            log_console=env_flag(env, "LOG_CONSOLE", False),
            log_json=env_flag(env, "LOG_JSON", False),
        )


__all__ = ["EditorConfig", "ENV_PREFIX", "env_flag", "env_int"]
