"""Clipboard and PRIMARY-selection backends.

A backend never raises to its caller: an unavailable tool turns writes
into ``False`` and reads into ``None``.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import pyperclip

from shift_select.runtime import telemetry

Runner = Callable[..., "subprocess.CompletedProcess[bytes]"]

logger_name = "shift_select.clipboard"
COMMAND_TIMEOUT_S = 1.0


class ClipboardBackend:
    """Base backend: every read comes back empty and every write fails."""

    name = "none"

    def write_clipboard(self, text: str) -> bool:
        del text
        return False

    def read_clipboard(self) -> Optional[str]:
        return None

    def read_primary(self) -> Optional[str]:
        return None


class NullClipboard(ClipboardBackend):
    """Used when no clipboard tool could be found."""


@dataclass(frozen=True, slots=True)
class CommandSet:
    copy: tuple[str, ...]
    paste: tuple[str, ...]
    primary: tuple[str, ...]


WAYLAND_COMMANDS = CommandSet(
    copy=("wl-copy",),
    paste=("wl-paste", "--no-newline"),
    primary=("wl-paste", "--primary", "--no-newline"),
)

X11_COMMANDS = CommandSet(
    copy=("xclip", "-selection", "clipboard"),
    paste=("xclip", "-selection", "clipboard", "-o"),
    primary=("xclip", "-selection", "primary", "-o"),
)


class CommandClipboard(ClipboardBackend):
    """Pipes text through ``wl-copy``/``wl-paste`` or ``xclip``."""

    def __init__(
        self,
        name: str,
        commands: CommandSet,
        *,
        runner: Optional[Runner] = None,
        timeout: float = COMMAND_TIMEOUT_S,
    ) -> None:
        self.name = name
        self.commands = commands
        self._run: Runner = runner or subprocess.run
        self._timeout = timeout

    def write_clipboard(self, text: str) -> bool:
        result = self._invoke(self.commands.copy, stdin=text.encode("utf-8"))
        return result is not None

    def read_clipboard(self) -> Optional[str]:
        return self._invoke(self.commands.paste)

    def read_primary(self) -> Optional[str]:
        return self._invoke(self.commands.primary)

    def _invoke(
        self, argv: Sequence[str], *, stdin: Optional[bytes] = None
    ) -> Optional[str]:
        try:
            completed = self._run(
                list(argv),
                input=stdin,
                capture_output=True,
                timeout=self._timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            telemetry.record_event(
                "clipboard.command_failed",
                data={"argv": " ".join(argv), "error": str(exc)},
                logger_name=logger_name,
            )
            return None
        if completed.returncode != 0:
            return None
        return (completed.stdout or b"").decode("utf-8", errors="replace")


class PyperclipClipboard(ClipboardBackend):
    """System clipboard through pyperclip; it has no PRIMARY selection."""

    name = "pyperclip"

    def write_clipboard(self, text: str) -> bool:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            telemetry.record_event(
                "clipboard.pyperclip_failed",
                data={"error": str(exc)},
                logger_name=logger_name,
            )
            return False
        return True

    def read_clipboard(self) -> Optional[str]:
        try:
            return pyperclip.paste()
        except pyperclip.PyperclipException:
            return None


class MemoryClipboard(ClipboardBackend):
    """In-process clipboard used by tests and headless hosts.

    ``primary`` plays the part of the terminal's mouse selection and can be
    changed at any time by the caller.
    """

    name = "memory"

    def __init__(self, *, clipboard: str = "", primary: str = "") -> None:
        self.clipboard = clipboard
        self.primary = primary
        self.writes: list[str] = []

    def write_clipboard(self, text: str) -> bool:
        self.clipboard = text
        self.writes.append(text)
        return True

    def read_clipboard(self) -> Optional[str]:
        return self.clipboard

    def read_primary(self) -> Optional[str]:
        return self.primary


__all__ = [
    "COMMAND_TIMEOUT_S",
    "ClipboardBackend",
    "CommandClipboard",
    "CommandSet",
    "MemoryClipboard",
    "NullClipboard",
    "PyperclipClipboard",
    "WAYLAND_COMMANDS",
    "X11_COMMANDS",
]
