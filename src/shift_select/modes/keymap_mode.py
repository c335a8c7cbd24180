"""Shared key handling for modes whose bindings live in the keymap registry."""

from __future__ import annotations

from typing import List

from shift_select.keymaps.resolver import ResolutionMatch
from shift_select.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, require_keymap_resolver


class KeymapMode(Mode):
    """Resolves keys through the trie; misses go to :meth:`handle_unbound`."""

    def __init__(
        self,
        context: ModeContext,
        *,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []
        self._default_timeout_ms = default_pending_timeout_ms

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(self.name, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True,
                status="pending",
                message="awaiting_sequence",
                timeout_ms=result.timeout_ms or self._default_timeout_ms,
            )

        self._pending.clear()
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:  # pragma: no cover
        raise NotImplementedError

    def handle_timeout(self) -> ModeResult:
        # A prefix never carries its own binding, so an expired one is dropped.
        if not self._pending:
            return ModeResult(consumed=False, status="timeout")
        dropped = " ".join(self._pending)
        self._pending.clear()
        telemetry.record_event(
            "keymaps.pending_expired", data={"mode": self.name, "keys": dropped}
        )
        return ModeResult(consumed=False, status="timeout", message="pending_timeout")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)
