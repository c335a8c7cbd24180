from __future__ import annotations

import subprocess
from typing import Any, Dict, List, Optional

import pytest

from shift_select.clipboard import (
    WAYLAND_COMMANDS,
    X11_COMMANDS,
    CommandClipboard,
    MemoryClipboard,
    NullClipboard,
    PyperclipClipboard,
    detect_clipboard,
)
from shift_select.runtime.config import ShiftSelectConfig


class FakeRunner:
    def __init__(self, *, stdout: bytes = b"", returncode: int = 0) -> None:
        self.stdout = stdout
        self.returncode = returncode
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, argv: List[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append({"argv": argv, **kwargs})
        return subprocess.CompletedProcess(
            argv, self.returncode, stdout=self.stdout, stderr=b""
        )


def make_which(*available: str):
    return lambda name: f"/usr/bin/{name}" if name in available else None


def test_command_clipboard_write_pipes_stdin() -> None:
    runner = FakeRunner()
    backend = CommandClipboard("x11", X11_COMMANDS, runner=runner)

    assert backend.write_clipboard("héllo") is True

    call = runner.calls[0]
    assert call["argv"] == ["xclip", "-selection", "clipboard"]
    assert call["input"] == "héllo".encode("utf-8")
    assert call["check"] is False


def test_command_clipboard_reads() -> None:
    runner = FakeRunner(stdout=b"picked")
    backend = CommandClipboard("wayland", WAYLAND_COMMANDS, runner=runner)

    assert backend.read_clipboard() == "picked"
    assert backend.read_primary() == "picked"
    assert runner.calls[1]["argv"] == ["wl-paste", "--primary", "--no-newline"]


def test_command_clipboard_failure_is_no_data() -> None:
    backend = CommandClipboard(
        "x11", X11_COMMANDS, runner=FakeRunner(stdout=b"junk", returncode=1)
    )

    assert backend.read_primary() is None
    assert backend.write_clipboard("x") is False


@pytest.mark.parametrize(
    "error", [FileNotFoundError("xclip"), subprocess.TimeoutExpired("xclip", 1.0)]
)
def test_command_clipboard_swallows_process_errors(error: Exception) -> None:
    def runner(argv: List[str], **kwargs: Any) -> subprocess.CompletedProcess:
        raise error

    backend = CommandClipboard("x11", X11_COMMANDS, runner=runner)

    assert backend.read_clipboard() is None
    assert backend.write_clipboard("x") is False


def test_null_and_memory_backends() -> None:
    null = NullClipboard()
    memory = MemoryClipboard(primary="sel")

    assert null.write_clipboard("x") is False
    assert null.read_primary() is None
    assert memory.write_clipboard("x") is True
    assert memory.read_clipboard() == "x"
    assert memory.read_primary() == "sel"
    assert memory.writes == ["x"]


def detect(
    kind: str = "auto",
    *,
    environ: Optional[Dict[str, str]] = None,
    available: tuple[str, ...] = (),
    platform: str = "linux",
):
    return detect_clipboard(
        ShiftSelectConfig(clipboard_type=kind),
        environ=environ or {},
        which=make_which(*available),
        platform=platform,
    )


def test_detect_prefers_wayland() -> None:
    backend = detect(
        environ={"WAYLAND_DISPLAY": "wayland-0", "DISPLAY": ":0"},
        available=("wl-copy", "xclip"),
    )

    assert isinstance(backend, CommandClipboard)
    assert backend.name == "wayland"


def test_detect_falls_back_to_x11() -> None:
    backend = detect(environ={"DISPLAY": ":0"}, available=("wl-copy", "xclip"))

    assert backend.name == "x11"


def test_detect_explicit_backend_missing_tool() -> None:
    assert isinstance(detect("x11"), NullClipboard)
    assert detect("wayland", available=("wl-copy",)).name == "wayland"


def test_detect_none_and_headless() -> None:
    assert isinstance(detect("none", available=("xclip",)), NullClipboard)
    assert isinstance(detect(), NullClipboard)


def test_detect_uses_pyperclip_on_macos() -> None:
    assert isinstance(detect(platform="darwin"), PyperclipClipboard)
