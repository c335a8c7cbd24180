"""Keyboard selection state and the reconciled mouse-selection snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from shift_select.buffer import LineBuffer
from shift_select.runtime import telemetry

logger_name = "shift_select.selection"


@dataclass(frozen=True, slots=True)
class KeyboardSelection:
    """Read-only view of the host's MARK / CURSOR / REGION_ACTIVE."""

    mark: int
    cursor: int
    active: bool

    @property
    def range(self) -> Optional[Tuple[int, int]]:
        if not self.active:
            return None
        start = min(self.mark, self.cursor)
        return (start, max(self.mark, self.cursor) - start)


@dataclass(slots=True)
class MouseSelectionSnapshot:
    last_seen_text: str = ""
    active_text: str = ""


class SelectionModel:
    """Owns the keyboard selection on ``buffer`` and the mouse snapshot.

    The keyboard selection lives in the buffer's own cursor/mark/region
    state, so host motions and selection changes always agree. The mouse
    snapshot is only written by :class:`MouseSelectionTracker` and read here
    through :meth:`consume_mouse_selection`.
    """

    def __init__(
        self, buffer: LineBuffer, *, mouse: Optional[MouseSelectionSnapshot] = None
    ) -> None:
        self.buffer = buffer
        self.mouse = mouse or MouseSelectionSnapshot()

    @property
    def keyboard(self) -> KeyboardSelection:
        state = self.buffer.state
        return KeyboardSelection(
            mark=state.mark, cursor=state.cursor, active=state.region_active
        )

    @property
    def is_active(self) -> bool:
        return self.buffer.state.region_active

    def activate_keyboard_selection(self, at_offset: int) -> None:
        state = self.buffer.state
        if state.region_active:
            return
        self.buffer.set_cursor(at_offset)
        state.set_mark(state.cursor)
        state.activate_region()

    def extend(self, new_cursor: int) -> KeyboardSelection:
        if not self.is_active:
            self.activate_keyboard_selection(self.buffer.cursor)
        self.buffer.move_cursor(new_cursor)
        return self.keyboard

    def select_all(self) -> KeyboardSelection:
        state = self.buffer.state
        state.set_mark(0)
        state.set_cursor(len(self.buffer))
        state.activate_region()
        return self.keyboard

    def selected_range(self) -> Optional[Tuple[int, int]]:
        return self.keyboard.range

    def selected_text(self) -> Optional[str]:
        span = self.selected_range()
        if span is None:
            return None
        start, length = span
        return self.buffer.get_text_range(start, start + length)

    def clear(self) -> None:
        self.buffer.state.deactivate_region()

    def delete_selected(self, *, label: str = "delete_selection") -> Optional[str]:
        """Remove the keyboard-selected text and deactivate the selection."""

        span = self.selected_range()
        if span is None:
            return None
        start, length = span
        delta = self.buffer.replace_range(start, start + length, "", label=label)
        self.clear()
        return delta.removed

    def consume_mouse_selection(self) -> Optional[str]:
        """Hand out the pending mouse selection at most once.

        Returns ``None`` when nothing is pending or when the pending text no
        longer occurs in the buffer; in the latter case the stale value is
        dropped rather than kept for a later action.
        """

        text = self.mouse.active_text
        if not text:
            return None
        self.mouse.active_text = ""
        if text not in self.buffer.text:
            telemetry.record_event(
                "mouse.discarded",
                data={"text": text, "reason": "not_in_buffer"},
                logger_name=logger_name,
            )
            return None
        telemetry.record_event(
            "mouse.consumed", data={"text": text}, logger_name=logger_name
        )
        return text

    def mark_mouse_consumed(self, text: str) -> None:
        self.mouse.last_seen_text = text
        self.mouse.active_text = ""

    def remove_first_occurrence(self, text: str) -> Optional[int]:
        """Delete the first occurrence of ``text``; cursor lands at the split.

        If ``text`` occurs more than once, the leftmost one is removed even
        when the user highlighted another. The terminal does not report
        where the mouse selection sits.
        """

        if not text:
            return None
        before, found, _after = self.buffer.text.partition(text)
        if not found:
            return None
        start = len(before)
        self.buffer.replace_range(start, start + len(text), "", label="mouse_delete")
        return start


__all__ = ["KeyboardSelection", "MouseSelectionSnapshot", "SelectionModel"]
