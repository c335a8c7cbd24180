"""Base classes and shared utilities for keymap modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from shift_select.buffer import LineBuffer
from shift_select.selection import SelectionModel, SessionState


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def printable(self) -> Optional[str]:
        """Text to insert for this key, if it is plain typing."""

        if not self.text or not self.text.isprintable():
            return None
        if "ctrl" in self.modifiers or "alt" in self.modifiers:
            return None
        return self.text


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``.

    ``redispatch`` asks the manager to feed the same key again after
    ``switch_to`` has been applied.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None
    redispatch: bool = False


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can access."""

    session: SessionState
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def buffer(self) -> LineBuffer:
        return self.session.buffer

    @property
    def selection(self) -> SelectionModel:
        return self.session.selection


class ModeBus:
    """Minimal event bus letting actions publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:  # pragma: no cover
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:  # pragma: no cover
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover
        raise NotImplementedError

    def handle_timeout(self) -> ModeResult:
        """Invoked by the manager when a pending key sequence expires."""

        return ModeResult(consumed=False, status="timeout")
