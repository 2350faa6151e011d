"""Key events, command results, and the shared editing context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from gapedit.buffer import Buffer
from gapedit.runtime.config import EditorConfig
from gapedit.view import Viewport


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to the engine."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def from_char(cls, char: str) -> "KeyInput":
        return cls(key=char, text=char)


@dataclass(slots=True)
class CommandResult:
    """Result returned from an action or ``EditEngine.handle_key``."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    quit: bool = False


@dataclass(slots=True)
class EditorContext:
    """Everything an action may touch while handling one key."""

    buffer: Buffer
    bus: "EventBus"
    config: EditorConfig = field(default_factory=EditorConfig)
    viewport: Viewport = field(default_factory=Viewport)
    path: Optional[str] = None
    status: Optional[str] = None


class EventBus:
    """Minimal event bus letting actions notify adapters."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = ["CommandResult", "EditorContext", "EventBus", "KeyInput"]
