"""Telemetry services built directly on telelog.

The rest of the editor only touches this narrow surface:

``configure(...)`` -- adopt an ``EditorConfig``, a preset, or a raw telelog config
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager marrying profiling + component tracking
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

from .config import EditorConfig

tl = cast(Any, telelog)

DEFAULT_LOGGER_NAME = "gapedit"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return repr(bytes(value[:32]))
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _telelog_config(
    level: str,
    *,
    console: bool = False,
    json: bool = False,
    log_file: str = "",
    buffered: bool = False,
) -> Any:
    """Assemble a ``tl.Config``; profiling is always on so spans are timed."""

    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(console)
    config.with_colored_output(console and not json)
    config.with_json_format(json)
    if log_file:
        config.with_file_output(log_file)
    if buffered:
        config.with_buffering(True)
    config.with_profiling(True)
    return config


def _config_from_settings(settings: EditorConfig) -> Any:
    return _telelog_config(
        settings.log_level,
        console=settings.log_console,
        json=settings.log_json,
        log_file=settings.log_file,
    )


def _build_preset_config(preset: str, settings: EditorConfig) -> Any:
    name = preset.lower()
    if name == "development":
        return _telelog_config("DEBUG", console=True)
    if name == "session":
        # Full-screen sessions must never write to the terminal.
        return _telelog_config(
            settings.log_level,
            json=settings.log_json,
            log_file=settings.log_file or f"{settings.program_name}.log",
            buffered=True,
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def configure(
    *,
    settings: Optional[EditorConfig] = None,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
) -> None:
    """Replace the active telelog configuration.

    Parameters
    ----------
    settings:
        Editor configuration supplying level, file and console options.
        Defaults to ``EditorConfig.from_env()``.
    config:
        Explicit ``tl.Config`` instance to adopt as-is.
    preset:
        ``"development"`` or ``"session"``. Mutually exclusive with ``config``.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    resolved = settings or EditorConfig.from_env()
    if preset:
        config = _build_preset_config(preset, resolved)
    elif config is None:
        config = _config_from_settings(resolved)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _config_from_settings(EditorConfig.from_env())
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for the given component."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]



def _emit(log: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    """Write ``message`` with ``payload`` as key/value pairs when the level allows."""

    level_name = str(level).lower()
    structured = getattr(log, f"{level_name}_with", None)
    if structured is not None:
        structured(message, _format_pairs(payload))
        return
    plain = getattr(log, level_name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` line with key/value data."""

    _emit(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    """Yielded by ``span``; extra metadata lands on the failure report."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _report(self, level: str, outcome: str, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, level, f"span::{outcome}", payload)

    def fail(self, reason: str) -> None:
        self._report("error", "fail", reason)

    def rollback(self, reason: str) -> None:
        self._report("warning", "rollback", reason)


@contextmanager
def _transient_context(
    log: Any, metadata: Optional[Dict[str, Any]]
) -> Iterator[Dict[str, str]]:
    pairs = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in pairs.items():
        log.add_context(key, value)
    try:
        yield pairs
    finally:
        for key in pairs:
            log.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, tracking it as a component when asked.

    ``component=True`` names the component after the span. Exceptions are
    reported through ``SpanHandle.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    if component is True:
        component_name: Optional[str] = name
    elif isinstance(component, str):
        component_name = component
    else:
        component_name = None

    with ExitStack() as stack:
        pairs = stack.enter_context(_transient_context(log, metadata))
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(log, name, component_name, dict(pairs))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
