"""Per-keystroke command dispatch.

``EditEngine`` lives in ``gapedit.engine.dispatcher``; it is not re-exported
here because the default keymaps import the action modules, which in turn
import these base types.
"""

from .base import CommandResult, EditorContext, EventBus, KeyInput

__all__ = ["CommandResult", "EditorContext", "EventBus", "KeyInput"]
