"""Selecting mode, active while a keyboard selection is highlighted."""

from __future__ import annotations

from shift_select.actions import editing

from .base_mode import KeyInput, ModeResult
from .keymap_mode import KeymapMode


class SelectingMode(KeymapMode):
    """Extend keys keep extending; typing replaces; anything else deselects.

    Keys without a binding here are not swallowed: the selection is dropped
    and the key is handed back for normal mode to process.
    """

    name = "selecting"

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self.context.selection.clear()

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = key.printable
        if text is not None:
            return editing.type_text(self.context, text)
        return editing.deselect_and_input(self.context)
