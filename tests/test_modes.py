from __future__ import annotations

from typing import List, Optional

import pytest

from shift_select.clipboard import MemoryClipboard
from shift_select.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    load_default_keymaps,
)
from shift_select.modes import KeyInput, ModeResult
from shift_select.modes.mode_manager import ModeManager, create_default_manager
from shift_select.runtime import telemetry
from shift_select.runtime.config import ShiftSelectConfig
from shift_select.selection import SessionState


def make_manager(
    text: str = "",
    *,
    cursor: Optional[int] = None,
    primary: str = "",
    clipboard: str = "",
    config: Optional[ShiftSelectConfig] = None,
    registry: Optional[KeymapRegistry] = None,
) -> ModeManager:
    session = SessionState.create(
        text,
        cursor=cursor,
        clipboard=MemoryClipboard(clipboard=clipboard, primary=primary),
        config=config,
    )
    return create_default_manager(session, keymap_registry=registry)


def key(name: str, *modifiers: str, text: Optional[str] = None) -> KeyInput:
    return KeyInput(key=name, modifiers=tuple(modifiers), text=text)


def char(value: str) -> KeyInput:
    return KeyInput(key=value, text=value)


def test_manager_starts_in_normal_mode() -> None:
    manager = make_manager("abc")

    assert manager.mode_name == "normal"
    assert manager.context.extras["keymap_resolver"] is manager.keymap_resolver


def test_extend_enters_selecting_and_keeps_extending() -> None:
    manager = make_manager("hello world", cursor=0)

    first = manager.handle_key(key("RIGHT", "shift"))
    second = manager.handle_key(key("RIGHT", "shift"))

    assert first.switch_to == "selecting"
    assert second.status == "extend"
    assert manager.mode_name == "selecting"
    assert manager.context.selection.selected_range() == (0, 2)


def test_word_and_line_extend_keys() -> None:
    manager = make_manager("foo bar baz", cursor=4)

    manager.handle_key(key("RIGHT", "ctrl", "shift"))
    assert manager.context.selection.selected_text() == "bar "
    manager.handle_key(key("END", "shift"))
    assert manager.context.selection.selected_text() == "bar baz"
    manager.handle_key(key("a", "ctrl", "shift"))
    assert manager.context.selection.selected_text() == "foo "


def test_plain_typing_replaces_keyboard_selection() -> None:
    manager = make_manager("hello world", cursor=5)
    manager.handle_key(key("END", "shift"))

    result = manager.handle_key(char("!"))

    assert result.status == "replace_selection"
    assert manager.mode_name == "normal"
    assert manager.context.buffer.text == "hello!"


def test_shifted_character_is_typed_not_extended() -> None:
    manager = make_manager("ab", cursor=2)

    result = manager.handle_key(KeyInput(key="A", modifiers=("shift",), text="A"))

    assert result.status == "insert"
    assert manager.context.buffer.text == "abA"


def test_select_all_and_cut_through_keys() -> None:
    manager = make_manager("some text")

    manager.handle_key(key("a", "ctrl"))
    assert manager.mode_name == "selecting"
    result = manager.handle_key(key("x", "ctrl"))

    assert result.status == "cut"
    assert manager.mode_name == "normal"
    assert manager.context.buffer.text == ""
    assert manager.context.session.clipboard.read_clipboard() == "some text"


def test_paste_through_keys() -> None:
    manager = make_manager("ab", clipboard="cd")

    manager.handle_key(key("v", "ctrl"))

    assert manager.context.buffer.text == "abcd"


def test_copy_through_keys() -> None:
    manager = make_manager("abc", cursor=0)
    manager.handle_key(key("RIGHT", "shift"))

    result = manager.handle_key(key("c", "ctrl", "shift"))

    assert result.status == "copy"
    assert manager.mode_name == "normal"
    assert manager.context.session.clipboard.read_clipboard() == "a"


def test_escape_deselects() -> None:
    manager = make_manager("abc", cursor=0)
    manager.handle_key(key("RIGHT", "shift"))

    result = manager.handle_key(key("ESC"))

    assert result.status == "deselect"
    assert manager.mode_name == "normal"
    assert manager.context.selection.is_active is False
    assert manager.context.buffer.text == "abc"


def test_configured_keys_are_used() -> None:
    config = ShiftSelectConfig(key_select_all="^[[1;5H", key_cut="^K")
    manager = make_manager("abc", config=config)

    manager.handle_key(key("HOME", "ctrl"))
    manager.handle_key(key("k", "ctrl"))

    assert manager.context.buffer.text == ""
    assert manager.context.session.clipboard.read_clipboard() == "abc"


@pytest.mark.parametrize("notation", ["ctrlx", "not a key", "^[[99;9Z"])
def test_unusable_configured_key_falls_back_to_default(
    monkeypatch: pytest.MonkeyPatch, notation: str
) -> None:
    warnings: List[dict] = []
    monkeypatch.setattr(
        telemetry, "warn", lambda message, **data: warnings.append(data)
    )
    manager = make_manager(
        "foo bar", cursor=0, config=ShiftSelectConfig(key_cut=notation)
    )

    for _ in range(3):
        manager.handle_key(key("RIGHT", "shift"))
    result = manager.handle_key(key("x", "ctrl"))

    assert result.status == "cut"
    assert manager.context.buffer.text == " bar"
    assert manager.context.session.clipboard.read_clipboard() == "foo"
    assert warnings
    assert {(w["action"], w["notation"]) for w in warnings} == {("CUT", notation)}


def test_multi_key_configured_cut() -> None:
    manager = make_manager(
        "foo bar", cursor=0, config=ShiftSelectConfig(key_cut="^X^C")
    )
    for _ in range(3):
        manager.handle_key(key("RIGHT", "shift"))

    pending = manager.handle_key(key("x", "ctrl"))

    assert pending.status == "pending"
    assert manager.mode_name == "selecting"
    assert manager.has_pending_timeouts is True

    result = manager.handle_key(key("c", "ctrl"))

    assert result.status == "cut"
    assert manager.mode_name == "normal"
    assert manager.has_pending_timeouts is False
    assert manager.context.buffer.text == " bar"
    assert manager.context.session.clipboard.read_clipboard() == "foo"


def test_expired_multi_key_prefix_is_dropped() -> None:
    manager = make_manager(
        "ab", clipboard="cd", config=ShiftSelectConfig(key_paste="^Y^V")
    )
    manager.handle_key(key("y", "ctrl"))

    manager.arm_timeout("normal", 0)
    results = manager.process_timeouts()
    lone = manager.handle_key(key("v", "ctrl"))

    assert results["normal"].status == "timeout"
    assert lone.consumed is False
    assert manager.context.buffer.text == "ab"

    manager.handle_key(key("y", "ctrl"))
    manager.handle_key(key("v", "ctrl"))

    assert manager.context.buffer.text == "abcd"


@pytest.mark.parametrize(
    "unbound",
    [key("LEFT"), key("HOME"), key("ENTER"), key("k", "ctrl"), key("TAB")],
)
def test_fallback_matches_normal_mode(unbound: KeyInput) -> None:
    selecting = make_manager("hello world", cursor=6)
    selecting.handle_key(key("RIGHT", "shift"))
    start_cursor = selecting.context.buffer.cursor

    normal = make_manager("hello world", cursor=start_cursor)

    replayed = selecting.handle_key(unbound)
    direct = normal.handle_key(unbound)

    assert selecting.mode_name == "normal"
    assert selecting.context.selection.is_active is False
    assert selecting.context.buffer.text == normal.context.buffer.text
    assert selecting.context.buffer.cursor == normal.context.buffer.cursor
    assert (replayed.status, replayed.consumed) == (direct.status, direct.consumed)
    assert replayed.redispatch is False


def test_fallback_emits_selection_cleared() -> None:
    manager = make_manager("abc", cursor=0)
    cleared: List[object] = []
    manager.context.bus.subscribe("selection.cleared", cleared.append)
    manager.handle_key(key("RIGHT", "shift"))

    manager.handle_key(key("LEFT"))

    assert cleared == [{"reason": "unbound_key"}]
    assert manager.context.buffer.cursor == 0


def test_mouse_selection_consumed_once_through_keys() -> None:
    manager = make_manager("foo bar", primary="bar")

    for value in "xy":
        manager.handle_key(char(value))
        manager.redraw()

    assert manager.context.buffer.text == "foo xy"


def test_redraw_marks_abandoned_mouse_selection_as_seen() -> None:
    manager = make_manager("foo bar")
    clipboard = manager.context.session.clipboard
    assert isinstance(clipboard, MemoryClipboard)

    clipboard.primary = "foo"
    manager.redraw()
    manager.handle_key(char("!"))

    assert manager.context.buffer.text == "foo bar!"


def test_mouse_replacement_can_be_disabled() -> None:
    manager = make_manager(
        "foo bar", primary="bar", config=ShiftSelectConfig(mouse_replacement=False)
    )

    manager.handle_key(char("!"))

    assert manager.context.buffer.text == "foo bar!"


def make_sequence_registry(calls: List[str]) -> KeymapRegistry:
    registry = KeymapRegistry()

    def handler(context, match) -> ModeResult:
        del context
        calls.append(match.binding.id)
        return ModeResult(consumed=True, status="custom")

    registry.register_action(ActionRef(id="test.custom", handler=handler))
    load_default_keymaps(
        registry,
        extra_bindings=(
            Binding(
                id="normal.esc_x",
                mode="normal",
                sequence=KeySequence.from_strings("ESC", "x", timeout_ms=250),
                action_id="test.custom",
            ),
        ),
    )
    return registry


def test_pending_sequence_completes() -> None:
    calls: List[str] = []
    manager = make_manager("", registry=make_sequence_registry(calls))

    pending = manager.handle_key(key("ESC"))
    assert pending.status == "pending"
    assert pending.timeout_ms == 250
    assert manager.has_pending_timeouts is True

    done = manager.handle_key(char("x"))

    assert done.status == "custom"
    assert calls == ["normal.esc_x"]
    assert manager.has_pending_timeouts is False
    assert manager.context.buffer.text == ""


def test_pending_sequence_times_out() -> None:
    calls: List[str] = []
    manager = make_manager("", registry=make_sequence_registry(calls))
    manager.handle_key(key("ESC"))

    manager.arm_timeout("normal", 0)
    results = manager.process_timeouts()
    typed = manager.handle_key(char("x"))

    assert results["normal"].status == "timeout"
    assert calls == []
    assert typed.status == "insert"
    assert manager.context.buffer.text == "x"


def test_switch_to_unknown_mode_raises() -> None:
    manager = make_manager()

    with pytest.raises(KeyError):
        manager.switch_mode("visual")
