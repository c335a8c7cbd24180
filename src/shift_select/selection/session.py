"""Per-editor session state shared by every mode and action."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shift_select.buffer import LineBuffer
from shift_select.clipboard import ClipboardBackend, detect_clipboard
from shift_select.runtime.config import ShiftSelectConfig

from .model import SelectionModel
from .tracker import MouseSelectionTracker, PrimaryReader


@dataclass(slots=True)
class SessionState:
    """Everything one edit session owns; no module-level singletons."""

    buffer: LineBuffer
    clipboard: ClipboardBackend
    config: ShiftSelectConfig
    selection: SelectionModel
    tracker: MouseSelectionTracker

    @classmethod
    def create(
        cls,
        text: str = "",
        *,
        cursor: Optional[int] = None,
        clipboard: Optional[ClipboardBackend] = None,
        config: Optional[ShiftSelectConfig] = None,
        primary_reader: Optional[PrimaryReader] = None,
    ) -> "SessionState":
        config = config or ShiftSelectConfig()
        buffer = LineBuffer.from_text(text, cursor=cursor)
        backend = clipboard if clipboard is not None else detect_clipboard(config)
        selection = SelectionModel(buffer)
        tracker = MouseSelectionTracker(
            selection,
            primary_reader or backend.read_primary,
            enabled=config.mouse_replacement,
        )
        return cls(
            buffer=buffer,
            clipboard=backend,
            config=config,
            selection=selection,
            tracker=tracker,
        )


__all__ = ["SessionState"]
