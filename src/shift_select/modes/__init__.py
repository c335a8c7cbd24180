"""Keymap mode controller: normal and selecting modes."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .keymap_mode import KeymapMode
from .normal_mode import NormalMode
from .selecting_mode import SelectingMode

__all__ = [
    "KeyInput",
    "KeymapMode",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "SelectingMode",
]
