"""Built-in keymap reproducing the editor's single-key command set."""

from __future__ import annotations

from gapedit.actions import clipboard as clipboard_actions
from gapedit.actions import editing as editing_actions
from gapedit.actions import motion as motion_actions
from gapedit.actions import session as session_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="edit.insert_tab",
        handler=editing_actions.insert_tab,
        description="Insert a tab",
    ),
    ActionRef(
        id="edit.newline",
        handler=editing_actions.insert_newline,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.delete_backward",
        handler=editing_actions.delete_backward,
        description="Delete the selection or the previous character",
    ),
    ActionRef(id="move.left", handler=motion_actions.move_left),
    ActionRef(id="move.right", handler=motion_actions.move_right),
    ActionRef(id="move.up", handler=motion_actions.move_up),
    ActionRef(id="move.down", handler=motion_actions.move_down),
    ActionRef(id="move.page_down", handler=motion_actions.page_down),
    ActionRef(id="move.page_up", handler=motion_actions.page_up),
    ActionRef(id="move.line_home", handler=motion_actions.line_home),
    ActionRef(id="move.line_end", handler=motion_actions.line_end),
    ActionRef(
        id="session.save",
        handler=session_actions.save_buffer,
        description="Write the buffer to its file",
    ),
    ActionRef(
        id="session.quit",
        handler=session_actions.quit_session,
        description="Leave the editor",
    ),
    ActionRef(
        id="selection.toggle",
        handler=clipboard_actions.toggle_selection,
        description="Pin or release the selection anchor",
    ),
    ActionRef(
        id="clipboard.cut",
        handler=clipboard_actions.cut_selection,
        description="Cut the selection",
    ),
    ActionRef(
        id="clipboard.copy",
        handler=clipboard_actions.copy_selection,
        description="Copy the selection",
    ),
    ActionRef(
        id="clipboard.paste",
        handler=clipboard_actions.paste_clipboard,
        description="Paste the clipboard at the cursor",
    ),
)


def _bind(binding_id: str, key: str, action_id: str) -> Binding:
    return Binding(
        id=binding_id,
        sequence=KeySequence.from_strings(key),
        action_id=action_id,
        source="defaults",
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("key.tab", "TAB", "edit.insert_tab"),
    _bind("key.enter", "ENTER", "edit.newline"),
    _bind("key.backspace", "BACKSPACE", "edit.delete_backward"),
    _bind("key.delete", "DELETE", "edit.delete_backward"),
    _bind("key.left", "LEFT", "move.left"),
    _bind("key.right", "RIGHT", "move.right"),
    _bind("key.up", "UP", "move.up"),
    _bind("key.down", "DOWN", "move.down"),
    _bind("key.page_down", "PAGE_DOWN", "move.page_down"),
    _bind("key.page_up", "PAGE_UP", "move.page_up"),
    _bind("key.home", "HOME", "move.line_home"),
    _bind("key.end", "END", "move.line_end"),
    _bind("key.ctrl_s", "ctrl+s", "session.save"),
    _bind("key.ctrl_q", "ctrl+q", "session.quit"),
    _bind("key.ctrl_t", "ctrl+t", "selection.toggle"),
    _bind("key.ctrl_x", "ctrl+x", "clipboard.cut"),
    _bind("key.ctrl_c", "ctrl+c", "clipboard.copy"),
    _bind("key.ctrl_p", "ctrl+p", "clipboard.paste"),
)


def load_default_keymaps(registry: KeymapRegistry, *, replace: bool = False) -> None:
    """Register built-in actions and bindings."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding, replace=replace)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
