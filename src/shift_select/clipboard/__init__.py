"""Clipboard adapter over wl-clipboard, xclip, or pyperclip."""

from .backends import (
    ClipboardBackend,
    CommandClipboard,
    CommandSet,
    MemoryClipboard,
    NullClipboard,
    PyperclipClipboard,
    WAYLAND_COMMANDS,
    X11_COMMANDS,
)
from .detect import detect_clipboard

__all__ = [
    "ClipboardBackend",
    "CommandClipboard",
    "CommandSet",
    "MemoryClipboard",
    "NullClipboard",
    "PyperclipClipboard",
    "WAYLAND_COMMANDS",
    "X11_COMMANDS",
    "detect_clipboard",
]
