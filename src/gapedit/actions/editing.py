"""Actions that insert or delete buffer content."""

from __future__ import annotations

from gapedit.engine.base import CommandResult, EditorContext
from gapedit.errors import EditorError


def _apply_insert(context: EditorContext, data: bytes, *, label: str) -> CommandResult:
    try:
        context.buffer.insert_text(data, label=label)
    except EditorError as exc:
        return CommandResult(consumed=True, status="error", message=str(exc))
    return CommandResult(consumed=True, status=label)


def insert_byte(context: EditorContext, byte: int) -> CommandResult:
    """Self-insert for printable keys that have no binding of their own."""

    return _apply_insert(context, bytes([byte]), label="insert")


def insert_tab(context: EditorContext, match) -> CommandResult:
    del match
    return _apply_insert(context, b"\t", label="insert")


def insert_newline(context: EditorContext, match) -> CommandResult:
    del match
    return _apply_insert(context, b"\n", label="newline")


def delete_backward(context: EditorContext, match) -> CommandResult:
    del match
    try:
        removed = context.buffer.delete_backward()
    except EditorError as exc:
        return CommandResult(consumed=True, status="error", message=str(exc))
    if not removed:
        return CommandResult(consumed=True, status="noop")
    return CommandResult(consumed=True, status="delete")


__all__ = ["insert_byte", "insert_tab", "insert_newline", "delete_backward"]
