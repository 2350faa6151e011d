"""Save and quit actions."""

from __future__ import annotations

from gapedit.engine.base import CommandResult, EditorContext
from gapedit.errors import EditorError
from gapedit.runtime import storage

NO_FILE_NAME = "no file name"


def save_buffer(context: EditorContext, match) -> CommandResult:
    del match
    if not context.path:
        return CommandResult(consumed=True, status="error", message=NO_FILE_NAME)
    data = context.buffer.gap.dump()
    try:
        storage.save_file(context.path, data)
    except EditorError as exc:
        context.bus.emit(
            "buffer.save_failed",
            {"path": context.path, "kind": exc.kind.value, "reason": str(exc)},
        )
        return CommandResult(consumed=True, status="error", message=str(exc))
    context.bus.emit("buffer.save", {"path": context.path, "bytes": len(data)})
    return CommandResult(consumed=True, status="save")


def quit_session(context: EditorContext, match) -> CommandResult:
    del match
    context.bus.emit("session.quit", {"path": context.path})
    return CommandResult(consumed=True, status="quit", quit=True)


__all__ = ["save_buffer", "quit_session"]
