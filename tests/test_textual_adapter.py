from __future__ import annotations

from typing import Any, Dict, List

from shift_select.adapters.textual import TextualShiftSelectAdapter, TextualUIHooks
from shift_select.clipboard import MemoryClipboard
from shift_select.modes.mode_manager import ModeManager, create_default_manager
from shift_select.selection import SessionState


def make_manager(text: str = "", *, primary: str = "") -> ModeManager:
    session = SessionState.create(text, clipboard=MemoryClipboard(primary=primary))
    return create_default_manager(session)


def test_adapter_updates_buffer_and_status() -> None:
    manager = make_manager()
    updates: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: updates.append(mirror.text),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualShiftSelectAdapter(manager, hooks)

    adapter.handle_textual_key("h", text="h")
    adapter.handle_textual_key("i", text="i")

    assert updates[0] == ""
    assert updates[-1] == "hi"
    assert statuses[-1] == "normal:insert"


def test_adapter_reports_selection_in_mirror() -> None:
    manager = make_manager("hello")
    selections: List[Any] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: selections.append(mirror.selection))
    adapter = TextualShiftSelectAdapter(manager, hooks)

    adapter.handle_textual_key("LEFT", modifiers=("SHIFT",))
    adapter.handle_textual_key("LEFT", modifiers=("shift",))

    assert selections[-1] == (3, 5)
    assert manager.mode_name == "selecting"


def test_adapter_accepts_line_on_enter() -> None:
    manager = make_manager("echo hi")
    accepted: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: None, accept_line=accepted.append)
    adapter = TextualShiftSelectAdapter(manager, hooks)
    adapter.handle_textual_key("LEFT", modifiers=("shift",))

    result = adapter.handle_textual_key("ENTER")

    assert result.consumed is False
    assert accepted == ["echo hi"]
    assert manager.context.buffer.text == ""
    assert manager.mode_name == "normal"


def test_adapter_relays_bus_events() -> None:
    manager = make_manager("foo bar", primary="bar")
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualShiftSelectAdapter(manager, hooks)

    adapter.handle_textual_key("x", text="x")

    names = [event["name"] for event in events]
    assert names == ["mouse.consumed", "edit.insert"]
    assert events[0]["payload"] == {"text": "bar", "start": 4}
    assert manager.context.buffer.text == "foo x"


def test_adapter_redraw_keeps_abandoned_mouse_selection_seen() -> None:
    manager = make_manager("foo bar")
    hooks = TextualUIHooks(update_buffer=lambda mirror: None)
    adapter = TextualShiftSelectAdapter(manager, hooks)
    clipboard = manager.context.session.clipboard
    assert isinstance(clipboard, MemoryClipboard)

    clipboard.primary = "foo"
    adapter.handle_textual_key("END")
    adapter.handle_textual_key("!", text="!")

    assert manager.context.buffer.text == "foo bar!"


def test_adapter_emits_log_lines() -> None:
    manager = make_manager()
    logs: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: None, log=logs.append)
    adapter = TextualShiftSelectAdapter(manager, hooks)

    adapter.handle_textual_key("a", text="a")

    assert any(line.startswith("key ->") for line in logs)
    assert any("status='insert'" in line for line in logs)


def test_adapter_process_timeouts_without_pending() -> None:
    manager = make_manager()
    hooks = TextualUIHooks(update_buffer=lambda mirror: None)
    adapter = TextualShiftSelectAdapter(manager, hooks)

    assert adapter.process_timeouts() == {}
