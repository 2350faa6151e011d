"""Gap-buffer storage, line addressing, pointer and selection model."""

from .buffer import Buffer, Transaction
from .clipboard import Clipboard
from .gap import GapBuffer
from .lines import compare, cursor_from_offset, line_count, line_length, offset_of
from .selection import (
    copy_range,
    copy_selection,
    delete_selection,
    is_selected,
    selection_length,
    selection_start,
)
from .state import Cursor, Pointer

__all__ = [
    "Buffer",
    "Clipboard",
    "Cursor",
    "GapBuffer",
    "Pointer",
    "Transaction",
    "compare",
    "copy_range",
    "copy_selection",
    "cursor_from_offset",
    "delete_selection",
    "is_selected",
    "line_count",
    "line_length",
    "offset_of",
    "selection_length",
    "selection_start",
]
