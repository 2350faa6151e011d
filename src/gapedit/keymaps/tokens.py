"""Translate key events into binding tokens."""

from __future__ import annotations

from gapedit.engine.base import KeyInput

_CONTROL_TOKENS = {
    "\t": "TAB",
    "\n": "ENTER",
    "\r": "ENTER",
    "\x08": "BACKSPACE",
    "\x7f": "BACKSPACE",
}


def key_to_token(key: KeyInput) -> str:
    """Return the binding token for ``key``.

    Raw control bytes follow the terminal convention ``value + 64 == letter``,
    so ``"\\x13"`` and ``KeyInput("s", ("ctrl",))`` both become ``"ctrl+s"``.
    """

    name = key.key
    if len(name) == 1:
        if name in _CONTROL_TOKENS:
            return _CONTROL_TOKENS[name]
        if ord(name) < 0x20:
            return f"ctrl+{chr(ord(name) + 64).lower()}"
    if key.modifiers:
        modifiers = sorted(dict.fromkeys(m.strip().lower() for m in key.modifiers))
        if len(name) == 1:
            name = name.lower()
        return "+".join([*modifiers, name])
    return name


__all__ = ["key_to_token"]
