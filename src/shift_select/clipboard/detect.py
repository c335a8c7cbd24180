"""Pick a clipboard backend for the current display server."""

from __future__ import annotations

import os
import shutil
import sys
from typing import Callable, Mapping, Optional

from shift_select.runtime import telemetry
from shift_select.runtime.config import ShiftSelectConfig

from .backends import (
    WAYLAND_COMMANDS,
    X11_COMMANDS,
    ClipboardBackend,
    CommandClipboard,
    CommandSet,
    NullClipboard,
    PyperclipClipboard,
    logger_name,
)

Which = Callable[[str], Optional[str]]


def detect_clipboard(
    config: Optional[ShiftSelectConfig] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    which: Which = shutil.which,
    platform: Optional[str] = None,
) -> ClipboardBackend:
    """Return the backend selected by ``config.clipboard_type``.

    ``auto`` prefers Wayland, then X11. A backend that was requested
    explicitly but whose tool is missing produces a startup warning and a
    :class:`NullClipboard`.
    """

    env = os.environ if environ is None else environ
    kind = (config or ShiftSelectConfig()).clipboard_type
    platform = platform or sys.platform

    if kind == "none":
        backend: ClipboardBackend = NullClipboard()
    elif kind == "wayland":
        backend = _require("wl-copy", "wayland", WAYLAND_COMMANDS, which)
    elif kind == "x11":
        backend = _require("xclip", "x11", X11_COMMANDS, which)
    elif which("wl-copy") and env.get("WAYLAND_DISPLAY"):
        backend = CommandClipboard("wayland", WAYLAND_COMMANDS)
    elif which("xclip") and env.get("DISPLAY"):
        backend = CommandClipboard("x11", X11_COMMANDS)
    elif platform == "darwin" or platform.startswith("win"):
        backend = PyperclipClipboard()
    else:
        backend = NullClipboard()

    telemetry.record_event(
        "clipboard.detected",
        level="info",
        data={"requested": kind, "backend": backend.name},
        logger_name=logger_name,
    )
    return backend


def _require(
    binary: str, name: str, commands: CommandSet, which: Which
) -> ClipboardBackend:
    if which(binary):
        return CommandClipboard(name, commands)
    telemetry.warn(
        f"{binary} not found; clipboard integration disabled",
        logger_name=logger_name,
        backend=name,
    )
    return NullClipboard()


__all__ = ["detect_clipboard"]
