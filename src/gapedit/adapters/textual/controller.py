"""Textual adapter that feeds keys to the EditEngine and pushes frames to widgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from gapedit.engine import CommandResult, KeyInput
from gapedit.engine.dispatcher import EditEngine
from gapedit.view import Frame

BUS_EVENTS = (
    "buffer.save",
    "buffer.save_failed",
    "selection.toggle",
    "clipboard.copy",
    "clipboard.cut",
    "clipboard.paste",
    "session.quit",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_quit: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges EditEngine + bus events to a Textual-friendly surface."""

    def __init__(
        self,
        engine: EditEngine,
        hooks: TextualUIHooks,
        *,
        width: int = 80,
        height: int = 24,
    ) -> None:
        self.engine = engine
        self.hooks = hooks
        self.width = width
        self.height = height
        self._subscribe_events()
        self.refresh()

    def resize(self, width: int, height: int) -> Frame:
        self.width = max(width, 1)
        self.height = max(height, 1)
        self._log_state("resize ->", width=self.width, height=self.height)
        return self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.engine.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        if result.quit:
            self.hooks.request_quit()
            return result
        self.refresh()
        return result

    def refresh(self) -> Frame:
        frame = self.engine.render(self.width, self.height)
        self.hooks.update_frame(frame)
        self.hooks.update_status(frame.status_line)
        return frame

    def _subscribe_events(self) -> None:
        bus = self.engine.context.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        context = self.engine.context
        buffer = context.buffer
        return {
            "cursor": buffer.pointer.position,
            "selecting": buffer.pointer.selection_active,
            "top_line": context.viewport.top_line,
            "pending": self.engine.pending_tokens,
            "buffer": buffer.name,
            "buffer_version": buffer.version,
        }


__all__ = ["BUS_EVENTS", "TextualEditorAdapter", "TextualUIHooks"]
