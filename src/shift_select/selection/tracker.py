"""Poll-and-diff tracking of the terminal's mouse (PRIMARY) selection."""

from __future__ import annotations

from typing import Callable, Optional

from shift_select.runtime import telemetry

from .model import SelectionModel, logger_name

PrimaryReader = Callable[[], Optional[str]]


class MouseSelectionTracker:
    """Promotes a changed PRIMARY selection into ``active_text`` once.

    The selection has no change notification, so it is read before every
    action that may replace text (:meth:`refresh`) and on every redraw
    (:meth:`observe`).
    """

    def __init__(
        self,
        model: SelectionModel,
        reader: PrimaryReader,
        *,
        enabled: bool = True,
    ) -> None:
        self.model = model
        self._reader = reader
        self.enabled = enabled
        self._current = ""

    def _read(self) -> str:
        self._current = self._reader() or ""
        return self._current

    def current_text(self) -> str:
        """Text of the most recent read, whether or not it was new."""

        return self._current

    def refresh(self) -> bool:
        text = self._read()
        snapshot = self.model.mouse
        if not text or text == snapshot.last_seen_text:
            return False
        snapshot.last_seen_text = text
        if not self.enabled:
            return False
        replaced = snapshot.active_text
        snapshot.active_text = text
        telemetry.record_event(
            "mouse.promoted",
            data={"text": text, "replaced": replaced},
            logger_name=logger_name,
        )
        return True

    def observe(self) -> None:
        # Never promotes; only refresh() sets active_text.
        text = self._read()
        if text:
            self.model.mouse.last_seen_text = text


__all__ = ["MouseSelectionTracker", "PrimaryReader"]
