"""Minimal Textual adapter that wires ModeManager events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from shift_select.buffer import BufferMirror
from shift_select.modes import KeyInput, ModeResult
from shift_select.modes.mode_manager import ModeManager


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


BUS_EVENTS = (
    "selection.changed",
    "selection.cleared",
    "edit.insert",
    "edit.delete",
    "mouse.consumed",
    "clipboard.copy",
    "clipboard.cut",
    "clipboard.paste",
    "cursor.moved",
)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Receives the submitted line when Enter reaches the host unhandled.
    accept_line: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualShiftSelectAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        if not result.consumed and key.upper() in {"ENTER", "RETURN"}:
            self._accept_line()
        self.manager.redraw()
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
            timeout_ms=result.timeout_ms,
        )
        return result

    def process_timeouts(self) -> Dict[str, ModeResult]:
        """Forward expired timers and surface results to the UI."""

        results = self.manager.process_timeouts()
        for mode_name, outcome in results.items():
            self.hooks.update_status(f"{mode_name}:{outcome.status}")
            self._log_state("timeout ->", source_mode=mode_name, status=outcome.status)
        if results:
            self.manager.redraw()
            self._refresh_buffer()
        return results

    def _accept_line(self) -> None:
        buffer = self.manager.context.buffer
        line = buffer.text
        self.hooks.accept_line(line)
        buffer.set_text("")
        self._log_state("accept ->", line=line)

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.status
        if status:
            self.hooks.update_status(f"{self.manager.mode_name}:{status}")
        self._refresh_buffer()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.manager.context.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.manager.context.session
        buffer = session.buffer
        return {
            "mode": self.manager.mode_name or "?",
            "cursor": buffer.cursor,
            "selection": session.selection.selected_range(),
            "mouse": session.selection.mouse.active_text or None,
            "pending_timeout": self.manager.has_pending_timeouts,
            "buffer": buffer.name,
        }


__all__ = ["BUS_EVENTS", "TextualShiftSelectAdapter", "TextualUIHooks"]
