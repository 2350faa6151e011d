"""Declarative keymap registry and default bindings."""

from .models import ActionRef, Binding, KeySequence, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .tokens import key_to_token
from .defaults import load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "key_to_token",
    "load_default_keymaps",
]
