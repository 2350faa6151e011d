"""Cursor movement actions.

Horizontal moves and Home/End set the sticky column; vertical and page
moves restore it, clamped to the destination line.
"""

from __future__ import annotations

from gapedit.buffer.lines import line_count, line_length
from gapedit.engine.base import CommandResult, EditorContext


def _moved(status: str = "move") -> CommandResult:
    return CommandResult(consumed=True, status=status)


def _land_on_line(context: EditorContext, line: int) -> CommandResult:
    pointer = context.buffer.pointer
    pointer.line = line
    pointer.restore_column(line_length(context.buffer.gap, line))
    return _moved()


def move_left(context: EditorContext, match) -> CommandResult:
    del match
    pointer = context.buffer.pointer
    if pointer.column == 0:
        return _moved("noop")
    pointer.set_cursor(pointer.line, pointer.column - 1, sticky=True)
    return _moved()


def move_right(context: EditorContext, match) -> CommandResult:
    del match
    pointer = context.buffer.pointer
    if pointer.column >= line_length(context.buffer.gap, pointer.line):
        return _moved("noop")
    pointer.set_cursor(pointer.line, pointer.column + 1, sticky=True)
    return _moved()


def move_up(context: EditorContext, match) -> CommandResult:
    del match
    pointer = context.buffer.pointer
    if pointer.line == 0:
        return _moved("noop")
    return _land_on_line(context, pointer.line - 1)


def move_down(context: EditorContext, match) -> CommandResult:
    del match
    pointer = context.buffer.pointer
    if pointer.line >= line_count(context.buffer.gap):
        return _moved("noop")
    return _land_on_line(context, pointer.line + 1)


def page_down(context: EditorContext, match) -> CommandResult:
    del match
    last_line = line_count(context.buffer.gap)
    target = context.buffer.pointer.line + context.viewport.visible_height
    return _land_on_line(context, min(target, last_line))


def page_up(context: EditorContext, match) -> CommandResult:
    del match
    target = context.buffer.pointer.line - context.viewport.visible_height
    return _land_on_line(context, max(target, 0))


def line_home(context: EditorContext, match) -> CommandResult:
    del match
    pointer = context.buffer.pointer
    pointer.set_cursor(pointer.line, 0, sticky=True)
    return _moved()


def line_end(context: EditorContext, match) -> CommandResult:
    del match
    pointer = context.buffer.pointer
    length = line_length(context.buffer.gap, pointer.line)
    pointer.set_cursor(pointer.line, length, sticky=True)
    return _moved()


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "page_down",
    "page_up",
    "line_home",
    "line_end",
]
