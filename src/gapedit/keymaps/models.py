"""Key strokes, key sequences, actions, and the bindings that join them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

MODIFIER_SEPARATOR = "+"


def _clean_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    cleaned = {mod.strip().lower() for mod in modifiers}
    cleaned.discard("")
    return tuple(sorted(cleaned))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key plus its modifiers, e.g. ``ctrl+s`` or ``PAGE_UP``.

    Modifiers are lowercased and sorted. A single-character key under a
    modifier is lowercased too, so ``Ctrl+S`` and ``ctrl+s`` are the same
    stroke.
    """

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        modifiers = _clean_modifiers(self.modifiers)
        object.__setattr__(self, "modifiers", modifiers)
        if modifiers and len(self.key) == 1:
            object.__setattr__(self, "key", self.key.lower())

    @property
    def token(self) -> str:
        return MODIFIER_SEPARATOR.join((*self.modifiers, self.key))

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        if len(token) == 1:
            return cls(token)
        *modifiers, key = token.split(MODIFIER_SEPARATOR)
        return cls(key, tuple(modifiers))


@dataclass(frozen=True, slots=True)
class KeySequence:
    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("a key sequence needs at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *tokens: str) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(token) for token in tokens if token))


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named editor command; ``handler(context, match)`` returns a result."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    id: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id or not self.action_id:
            raise ValueError("binding needs both an id and an action_id")

    @property
    def key_signature(self) -> str:
        """Space-joined tokens; unique across a registry."""

        return " ".join(self.sequence.tokens)


__all__ = ["ActionRef", "Binding", "KeySequence", "KeyStroke"]
