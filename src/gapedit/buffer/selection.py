"""Selection queries and edits driven by a ``Pointer``."""

from __future__ import annotations

from typing import Iterator, Tuple

from gapedit.errors import BufferRangeError

from .gap import GapBuffer
from .lines import NEWLINE, compare, offset_of
from .state import Cursor, Pointer


def is_selected(pointer: Pointer, line: int, column: int) -> bool:
    """True when ``(line, column)`` lies between position and anchor inclusive."""

    if not pointer.selection_active:
        return False
    target = (line, column)
    from_position = compare(pointer.position, target)
    from_anchor = compare(pointer.anchor, target)
    return (from_position >= 0 and from_anchor <= 0) or (
        from_position <= 0 and from_anchor >= 0
    )


def selection_start(pointer: Pointer) -> Cursor:
    if compare(pointer.position, pointer.anchor) <= 0:
        return pointer.position
    return pointer.anchor


def _virtual_coordinates(buffer: GapBuffer) -> Iterator[Tuple[int, int, int]]:
    line = 0
    column = 0
    for offset, byte in enumerate(buffer.iter_bytes()):
        yield offset, line, column
        if byte == NEWLINE:
            line += 1
            column = 0
        else:
            column += 1


def _selected_run(buffer: GapBuffer, pointer: Pointer) -> Tuple[int, int]:
    """Return ``(first_offset, count)`` of the selected bytes."""

    first = -1
    count = 0
    for offset, line, column in _virtual_coordinates(buffer):
        if is_selected(pointer, line, column):
            if first < 0:
                first = offset
            count += 1
    return max(first, 0), count


def selection_length(buffer: GapBuffer, pointer: Pointer) -> int:
    return _selected_run(buffer, pointer)[1]


def delete_selection(buffer: GapBuffer, pointer: Pointer) -> int:
    """Remove the selected bytes and collapse the pointer onto the range start.

    Returns the number of bytes removed. Without an active selection nothing
    changes and 0 is returned.
    """

    if not pointer.selection_active:
        return 0
    # Coordinates grow monotonically with offset, so the selection is one run.
    first, count = _selected_run(buffer, pointer)
    for _ in range(count):
        buffer.delete(first)
    line, column = selection_start(pointer)
    pointer.set_cursor(line, column, sticky=True)
    pointer.clear_selection()
    return count


def copy_range(buffer: GapBuffer, offset: int, length: int) -> bytes:
    if offset < 0 or length < 0 or offset + length > buffer.length():
        raise BufferRangeError(
            f"range {offset}+{length} outside buffer of length {buffer.length()}",
            offset=offset,
        )
    return bytes(buffer.get(index) for index in range(offset, offset + length))


def copy_selection(buffer: GapBuffer, pointer: Pointer) -> bytes:
    length = selection_length(buffer, pointer)
    line, column = selection_start(pointer)
    return copy_range(buffer, offset_of(buffer, line, column), length)


__all__ = [
    "is_selected",
    "selection_start",
    "selection_length",
    "delete_selection",
    "copy_range",
    "copy_selection",
]
