"""Registry of editor actions and the key bindings that invoke them."""

from __future__ import annotations

from typing import ContextManager, Dict, Iterator, Optional

from gapedit.runtime.telemetry import SpanHandle, span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """A binding tried to claim keys that another binding already owns."""

    def __init__(self, binding: Binding, existing: Binding) -> None:
        super().__init__(
            f"Binding '{binding.id}' reuses keys '{binding.key_signature}' "
            f"already bound by '{existing.id}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Actions by id, bindings by id, and an index from key signature to binding.

    Every change to the bindings bumps ``revision()`` so resolvers know to
    rebuild their lookup structures.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_keys: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def _span(self, operation: str, **metadata: object) -> ContextManager[SpanHandle]:
        return span(
            f"keymaps::{operation}",
            logger_name=self._logger_name,
            component="keymaps",
            metadata=metadata,
        )

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def binding_for(self, *tokens: str) -> Optional[Binding]:
        """Return the binding for exactly this token sequence, if any."""

        binding_id = self._by_keys.get(" ".join(tokens))
        return None if binding_id is None else self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with self._span("register_action", action_id=action.id):
            if action.id in self._actions and not replace:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``.

        With ``replace`` an existing binding of the same id, or on the same
        keys, is evicted; without it either case is an error.
        """

        with self._span(
            "register_binding", binding_id=binding.id, keys=binding.key_signature
        ) as handle:
            self.get_action(binding.action_id)
            clash = self.detect_conflict(binding)
            previous = self._bindings.get(binding.id)
            if not replace:
                if clash is not None:
                    handle.add_metadata("conflicts", clash.id)
                    raise KeymapConflictError(binding, clash)
                if previous is not None:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
            for stale in (clash, previous):
                if stale is not None:
                    self._drop(stale)
            self._store(binding)
        return binding

    def iter_bindings(self) -> Iterator[Binding]:
        return iter(tuple(self._bindings.values()))

    def detect_conflict(self, binding: Binding) -> Optional[Binding]:
        """Return another binding already on ``binding``'s keys, if any."""

        owner = self._by_keys.get(binding.key_signature)
        if owner is None or owner == binding.id:
            return None
        return self._bindings[owner]

    def _store(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        self._by_keys[binding.key_signature] = binding.id
        self._revision += 1

    def _drop(self, binding: Binding) -> None:
        del self._bindings[binding.id]
        if self._by_keys.get(binding.key_signature) == binding.id:
            del self._by_keys[binding.key_signature]


__all__ = ["KeymapConflictError", "KeymapRegistry"]
