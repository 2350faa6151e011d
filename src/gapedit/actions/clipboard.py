"""Selection toggle and clipboard actions."""

from __future__ import annotations

from gapedit.engine.base import CommandResult, EditorContext
from gapedit.errors import EditorError


def toggle_selection(context: EditorContext, match) -> CommandResult:
    del match
    pointer = context.buffer.pointer
    active = pointer.toggle_selection()
    context.bus.emit(
        "selection.toggle", {"active": active, "anchor": pointer.anchor}
    )
    return CommandResult(consumed=True, status="select_on" if active else "select_off")


def _store_selection(context: EditorContext) -> bytes:
    data = context.buffer.copy_selection()
    context.buffer.clipboard.store(data)
    return data


def copy_selection(context: EditorContext, match) -> CommandResult:
    del match
    try:
        data = _store_selection(context)
    except EditorError as exc:
        return CommandResult(consumed=True, status="error", message=str(exc))
    context.bus.emit("clipboard.copy", {"length": len(data)})
    return CommandResult(consumed=True, status="copy")


def cut_selection(context: EditorContext, match) -> CommandResult:
    del match
    try:
        data = _store_selection(context)
        context.buffer.delete_selection()
    except EditorError as exc:
        return CommandResult(consumed=True, status="error", message=str(exc))
    context.bus.emit("clipboard.cut", {"length": len(data)})
    return CommandResult(consumed=True, status="cut")


def paste_clipboard(context: EditorContext, match) -> CommandResult:
    """Replace the selection (if any) with the clipboard and move past it."""

    del match
    clipboard = context.buffer.clipboard
    if clipboard.is_empty():
        return CommandResult(consumed=True, status="noop")
    data = clipboard.contents
    try:
        context.buffer.insert_text(data, label="paste")
    except EditorError as exc:
        return CommandResult(consumed=True, status="error", message=str(exc))
    context.bus.emit("clipboard.paste", {"length": len(data)})
    return CommandResult(consumed=True, status="paste")


__all__ = ["toggle_selection", "copy_selection", "cut_selection", "paste_clipboard"]
