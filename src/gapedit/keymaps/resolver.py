"""Resolve typed key tokens against the registry's bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from gapedit.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    binding_id: Optional[str] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)


def build_trie(registry: KeymapRegistry) -> TrieNode:
    """Prefix tree of every binding's tokens; leaves carry the binding id."""

    root = TrieNode()
    for binding in registry.iter_bindings():
        node = root
        for token in binding.sequence.tokens:
            node = node.children.setdefault(token, TrieNode())
        node.binding_id = binding.id
    return root


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """``match`` runs an action, ``pending`` waits for more keys, ``miss`` gives up."""

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    """Walks a cached trie; the cache is rebuilt whenever the registry changes."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._trie: Optional[TrieNode] = None
        self._trie_revision = -1

    def _root(self) -> TrieNode:
        revision = self._registry.revision()
        if self._trie is None or self._trie_revision != revision:
            self._trie = build_trie(self._registry)
            self._trie_revision = revision
        return self._trie

    def _lookup(self, tokens: tuple[str, ...]) -> ResolutionResult:
        node = self._root()
        for depth, token in enumerate(tokens):
            child = node.children.get(token)
            if child is None:
                return ResolutionResult(status="miss", consumed=depth)
            node = child

        if node.binding_id is not None:
            binding = self._registry.get_binding(node.binding_id)
            action = self._registry.get_action(binding.action_id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(binding, action),
                consumed=len(tokens),
            )
        if tokens and node.children:
            return ResolutionResult(
                status="pending",
                consumed=len(tokens),
                next_expected=tuple(sorted(node.children)),
            )
        return ResolutionResult(status="miss", consumed=len(tokens))

    def resolve(self, tokens: Sequence[str]) -> ResolutionResult:
        typed = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"tokens": " ".join(typed)},
        ) as handle:
            result = self._lookup(typed)
            handle.add_metadata("status", result.status)
            if result.match is not None:
                handle.add_metadata("binding_id", result.match.binding.id)
        return result


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult", "build_trie"]
