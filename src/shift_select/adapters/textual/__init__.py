"""Textual host for the shift-select engine."""

from .controller import TextualShiftSelectAdapter, TextualUIHooks

__all__ = ["TextualShiftSelectAdapter", "TextualUIHooks"]
