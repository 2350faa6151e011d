"""Edit engine: resolves each key to an action, then scrolls and renders."""

from __future__ import annotations

import os
from typing import List, Optional

from gapedit.actions import editing
from gapedit.buffer import Buffer
from gapedit.keymaps import (
    KeymapRegistry,
    KeymapResolver,
    ResolutionMatch,
    key_to_token,
    load_default_keymaps,
)
from gapedit.runtime import storage, telemetry
from gapedit.runtime.config import EditorConfig
from gapedit.view import Frame, render

from .base import CommandResult, EditorContext, EventBus, KeyInput

_TEXT_MODIFIERS = {"ctrl", "alt", "meta"}


def _printable_byte(key: KeyInput) -> Optional[int]:
    if any(mod.lower() in _TEXT_MODIFIERS for mod in key.modifiers):
        return None
    text = key.text if key.text is not None else key.key
    if len(text) != 1:
        return None
    value = ord(text)
    return value if 0x20 <= value <= 0x7E else None


class EditEngine:
    """Owns the keymap and dispatches one key event at a time.

    After every command the viewport is scrolled so the cursor line stays
    visible. ``render`` lays out the next frame and consumes the pending
    status message.
    """

    def __init__(
        self,
        context: EditorContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self.logger = telemetry.get_logger("gapedit.engine")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="gapedit.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="gapedit.keymaps"
        )
        self._pending: List[str] = []
        self.finished = False

    @classmethod
    def open(cls, path: str, *, config: EditorConfig | None = None) -> "EditEngine":
        """Load ``path`` (missing files start empty) into a fresh session.

        Raises ``EditorError`` for any other read failure.
        """

        settings = config or EditorConfig.from_env()
        data = storage.load_file(path)
        buffer = Buffer.from_bytes(
            data, name=os.path.basename(path) or path, chunk_size=settings.chunk_size
        )
        context = EditorContext(buffer=buffer, bus=EventBus(), config=settings, path=path)
        return cls(context)

    @property
    def pending_tokens(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def handle_key(self, key: KeyInput) -> CommandResult:
        with telemetry.span(
            name="engine::key",
            component=True,
            metadata={"key": key.key, "buffer": self.context.buffer.name},
        ) as handle:
            result = self._dispatch(key)
            handle.add_metadata("status", result.status)
        if result.message:
            self.context.status = result.message
        if result.status == "error":
            telemetry.record_event(
                "engine.command_failed",
                level="warning",
                data={"key": key.key, "reason": result.message},
            )
        if result.quit:
            self.finished = True
        self.context.viewport.follow(self.context.buffer.pointer.line)
        return result

    def _dispatch(self, key: KeyInput) -> CommandResult:
        self._pending.append(key_to_token(key))
        result = self.keymap_resolver.resolve(tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return CommandResult(consumed=True, status="pending")

        self._pending.clear()
        byte = _printable_byte(key)
        if byte is not None:
            return editing.insert_byte(self.context, byte)
        return CommandResult(consumed=False, status="miss")

    def _execute_match(self, match: ResolutionMatch) -> CommandResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, CommandResult):
            return outcome
        return CommandResult(consumed=True)

    def render(self, width: int, height: int) -> Frame:
        context = self.context
        with telemetry.span(
            "engine::render",
            component="view",
            metadata={"width": width, "height": height},
        ):
            frame = render(
                context.buffer.gap,
                context.viewport.top_line,
                context.buffer.pointer,
                context.status,
                width,
                height,
                tab_width=context.config.tab_width,
            )
        context.viewport.visible_height = frame.visible_height
        context.status = None
        return frame


__all__ = ["EditEngine"]
