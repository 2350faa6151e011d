"""Immediate-mode layout of buffer content onto a fixed-size display.

Every call lays out the whole visible region from scratch: there is no
damage tracking. The last display row is reserved for the status line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from gapedit.buffer.gap import GapBuffer
from gapedit.buffer.lines import NEWLINE, offset_of
from gapedit.buffer.selection import is_selected
from gapedit.buffer.state import Pointer
from gapedit.runtime.config import DEFAULT_TAB_WIDTH

TAB = 0x09
PRINTABLE = range(0x20, 0x7F)


@dataclass(slots=True)
class Cell:
    char: str = " "
    selected: bool = False


@dataclass(slots=True)
class Frame:
    """One rendered screen: content rows, cursor, and the status row."""

    width: int
    height: int
    rows: List[List[Cell]] = field(default_factory=list)
    cursor: Tuple[int, int] = (0, 0)  # (x, y)
    status: Optional[str] = None
    position_label: str = "0,0"
    visible_height: int = 0

    def row_text(self, y: int) -> str:
        return "".join(cell.char for cell in self.rows[y])

    def text_rows(self) -> List[str]:
        return [self.row_text(y) for y in range(len(self.rows))]

    @property
    def status_line(self) -> str:
        label = self.position_label[-self.width :] if self.width else ""
        room = max(0, self.width - len(label))
        message = (self.status or "")[:room]
        return message.ljust(room) + label


def render(
    buffer: GapBuffer,
    top_line: int,
    pointer: Pointer,
    status: Optional[str],
    width: int,
    height: int,
    *,
    tab_width: int = DEFAULT_TAB_WIDTH,
) -> Frame:
    """Lay out ``buffer`` from ``top_line`` and locate the cursor.

    ``Frame.visible_height`` estimates how many buffer lines fit from
    ``top_line`` onward: the lines actually completed plus one per unused
    display row.
    """

    width = max(width, 1)
    height = max(height, 1)
    content_rows = height - 1
    rows = [[Cell() for _ in range(width)] for _ in range(content_rows)]

    v_height = 0
    v_char = 0
    disp_x = 0
    disp_y = 0
    cursor = (0, 0)
    target = pointer.position

    def emit(char: str, selected: bool) -> None:
        if disp_y < content_rows:
            rows[disp_y][disp_x] = Cell(char, selected)

    offset = offset_of(buffer, top_line, 0)
    scan = buffer.iter_bytes(offset)
    length = buffer.length()
    while disp_y < content_rows and offset < length:
        selected = is_selected(pointer, top_line + v_height, v_char)
        byte = next(scan)
        if byte in PRINTABLE:
            emit(chr(byte), selected)
            disp_x += 1
            v_char += 1
        elif byte == TAB:
            for _ in range(tab_width):
                emit(" ", selected)
                disp_x += 1
                if disp_x >= width:
                    disp_x = 0
                    disp_y += 1
            v_char += 1
        elif byte == NEWLINE:
            disp_x = 0
            disp_y += 1
            v_char = 0
            v_height += 1
        if disp_x >= width:
            disp_x = 0
            disp_y += 1

        if (top_line + v_height, v_char) == target:
            cursor = (disp_x, disp_y)
        offset += 1

    return Frame(
        width=width,
        height=height,
        rows=rows,
        cursor=cursor,
        status=status,
        position_label=f"{pointer.column},{pointer.line}",
        visible_height=v_height + max(content_rows - disp_y, 0),
    )


__all__ = ["Cell", "Frame", "render"]
