"""Editing verbs bound to keys by the default keymap."""

from .clipboard import copy_selection, cut_selection, paste_clipboard, toggle_selection
from .editing import delete_backward, insert_byte, insert_newline, insert_tab
from .motion import (
    line_end,
    line_home,
    move_down,
    move_left,
    move_right,
    move_up,
    page_down,
    page_up,
)
from .session import quit_session, save_buffer

__all__ = [
    "copy_selection",
    "cut_selection",
    "paste_clipboard",
    "toggle_selection",
    "delete_backward",
    "insert_byte",
    "insert_newline",
    "insert_tab",
    "line_end",
    "line_home",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "page_down",
    "page_up",
    "quit_session",
    "save_buffer",
]
