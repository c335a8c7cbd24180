"""Keymap registry: actions plus one binding per key signature and mode."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from shift_select.runtime.telemetry import span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """Raised when a new binding reuses keys already bound in its mode."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' uses '{binding.key_signature}', "
            f"already bound by '{existing.id}' in mode '{binding.mode}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns action references and the per-mode binding tables.

    ``revision()`` moves on every binding change; the resolver uses it to
    know when its tries are stale.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        # mode -> key signature -> binding id
        self._keys: Dict[str, Dict[str, str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever held its keys or id."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            holder = self.binding_for_keys(binding.mode, binding.key_signature)
            if not replace:
                if holder is not None and holder.id != binding.id:
                    raise KeymapConflictError(binding, holder)
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")

            if holder is not None:
                handle.add_metadata("replaced", holder.id)
                self._remove(holder)
            previous = self._bindings.get(binding.id)
            if previous is not None:
                self._remove(previous)

            self._bindings[binding.id] = binding
            self._keys.setdefault(binding.mode, {})[binding.key_signature] = binding.id
            self._revision += 1
            return binding

    def binding_for_keys(self, mode: str, signature: str) -> Optional[Binding]:
        binding_id = self._keys.get(mode, {}).get(signature)
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._keys.get(mode, {}).values():
            yield self._bindings[binding_id]

    def _remove(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        table = self._keys.get(binding.mode, {})
        if table.get(binding.key_signature) == binding.id:
            del table[binding.key_signature]


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
]
