"""Textual front end.

``controller`` is importable without a terminal; ``app`` holds the
``GapEditApp`` and the ``gapedit`` console entry point.
"""

from .controller import TextualEditorAdapter, TextualUIHooks

__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
