"""Normal editing mode: host motions plus mouse-aware typing."""

from __future__ import annotations

from shift_select.actions import editing

from .base_mode import KeyInput, ModeResult
from .keymap_mode import KeymapMode


class NormalMode(KeymapMode):
    name = "normal"

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = key.printable
        if text is not None:
            return editing.type_text(self.context, text)
        # Enter, Tab and friends belong to the host line editor.
        return ModeResult(consumed=False, status="miss", message="unhandled")
