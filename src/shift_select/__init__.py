"""Shift-key selection and mouse-selection replacement for line editors."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "clipboard",
    "keymaps",
    "modes",
    "runtime",
    "selection",
]

__version__ = "0.1.0"
