"""User-facing editing verbs dispatched from the keymap modes."""

from .clipboard import copy_region, cut_region, paste_clipboard
from .editing import (
    consume_mouse_text,
    delete_backward,
    delete_forward,
    deselect_and_input,
    type_text,
)
from .selection import EXTEND_ACTIONS, MOVE_ACTIONS, deselect, select_all

__all__ = [
    "EXTEND_ACTIONS",
    "MOVE_ACTIONS",
    "consume_mouse_text",
    "copy_region",
    "cut_region",
    "delete_backward",
    "delete_forward",
    "deselect",
    "deselect_and_input",
    "paste_clipboard",
    "select_all",
    "type_text",
]
