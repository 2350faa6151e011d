"""Line/column addressing over a gap buffer.

Coordinates are never stored alongside the bytes; every translation scans
from the start of the buffer.
"""

from __future__ import annotations

from .gap import GapBuffer
from .state import Cursor

NEWLINE = 0x0A


def offset_of(buffer: GapBuffer, line: int, column: int) -> int:
    """Return the offset of ``(line, column)``.

    A column past the end of the line clamps to the line's terminating
    newline (or the end of the buffer); a line past the last one clamps to
    the end of the buffer.
    """

    offset = 0
    current_line = 0
    length = buffer.length()
    scan = buffer.iter_bytes()
    while current_line < line and offset < length:
        if next(scan) == NEWLINE:
            current_line += 1
        offset += 1

    current_column = 0
    while current_column < column and offset < length:
        if next(scan) == NEWLINE:
            break
        current_column += 1
        offset += 1
    return offset


def line_length(buffer: GapBuffer, line: int) -> int:
    start = offset_of(buffer, line, 0)
    length = 0
    for byte in buffer.iter_bytes(start):
        if byte == NEWLINE:
            break
        length += 1
    return length


def line_count(buffer: GapBuffer) -> int:
    """Number of newline bytes, i.e. the index of the last line."""

    return sum(1 for byte in buffer.iter_bytes() if byte == NEWLINE)


def cursor_from_offset(buffer: GapBuffer, offset: int) -> Cursor:
    line = 0
    column = 0
    for index, byte in enumerate(buffer.iter_bytes()):
        if index >= offset:
            break
        if byte == NEWLINE:
            line += 1
            column = 0
        else:
            column += 1
    return (line, column)


def compare(first: Cursor, second: Cursor) -> int:
    """Lexicographic comparison returning 1, 0 or -1."""

    if first[0] != second[0]:
        return 1 if first[0] > second[0] else -1
    if first[1] != second[1]:
        return 1 if first[1] > second[1] else -1
    return 0


__all__ = [
    "NEWLINE",
    "offset_of",
    "line_length",
    "line_count",
    "cursor_from_offset",
    "compare",
]
