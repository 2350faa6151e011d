"""Cursor, sticky column, and selection state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (line, column)


@dataclass(slots=True)
class Pointer:
    """Mutable editing cursor.

    ``old_column`` is the last column chosen by a horizontal move or an edit;
    vertical moves restore it. ``anchor`` only has meaning while
    ``selection_active`` is set.
    """

    line: int = 0
    column: int = 0
    old_column: int = 0
    selection_active: bool = False
    anchor: Cursor = (0, 0)

    @property
    def position(self) -> Cursor:
        return (self.line, self.column)

    def set_cursor(self, line: int, column: int, *, sticky: bool = False) -> None:
        self.line = line
        self.column = column
        if sticky:
            self.old_column = column

    def restore_column(self, line_length: int) -> None:
        self.column = min(self.old_column, line_length)

    def toggle_selection(self) -> bool:
        self.selection_active = not self.selection_active
        if self.selection_active:
            self.anchor = self.position
        return self.selection_active

    def clear_selection(self) -> None:
        self.selection_active = False


__all__ = ["Cursor", "Pointer"]
