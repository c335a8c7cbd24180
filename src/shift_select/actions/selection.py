"""Cursor movement and keyboard-selection actions."""

from __future__ import annotations

from typing import Callable

from shift_select.buffer import MOTIONS, Motion
from shift_select.modes.base_mode import ModeContext, ModeResult

ActionHandler = Callable[[ModeContext, object], ModeResult]


def _emit_selection(context: ModeContext, *, source: str) -> None:
    keyboard = context.selection.keyboard
    context.bus.emit(
        "selection.changed",
        {
            "mark": keyboard.mark,
            "cursor": keyboard.cursor,
            "range": keyboard.range,
            "source": source,
        },
    )


def make_move_action(name: str, motion: Motion) -> ActionHandler:
    """Plain host motion, as bound to unshifted keys in normal mode."""

    def move(context: ModeContext, match: object) -> ModeResult:
        del match
        buffer = context.buffer
        buffer.move_cursor(motion(buffer.text, buffer.cursor))
        context.bus.emit("cursor.moved", {"cursor": buffer.cursor, "motion": name})
        return ModeResult(consumed=True, status="move", message=name)

    move.__name__ = f"move_{name}"
    return move


def make_extend_action(name: str, motion: Motion) -> ActionHandler:
    """Shift+motion: anchor the mark on first use, then move the cursor."""

    def extend(context: ModeContext, match: object) -> ModeResult:
        del match
        buffer = context.buffer
        context.selection.extend(motion(buffer.text, buffer.cursor))
        _emit_selection(context, source=name)
        return ModeResult(
            consumed=True, switch_to="selecting", status="extend", message=name
        )

    extend.__name__ = f"extend_{name}"
    return extend


MOVE_ACTIONS = {name: make_move_action(name, fn) for name, fn in MOTIONS.items()}
EXTEND_ACTIONS = {name: make_extend_action(name, fn) for name, fn in MOTIONS.items()}


def select_all(context: ModeContext, match: object) -> ModeResult:
    del match
    context.selection.select_all()
    _emit_selection(context, source="select_all")
    return ModeResult(consumed=True, switch_to="selecting", status="select_all")


def deselect(context: ModeContext, match: object) -> ModeResult:
    del match
    context.selection.clear()
    context.bus.emit("selection.cleared", {"reason": "deselect"})
    return ModeResult(consumed=True, switch_to="normal", status="deselect")


__all__ = [
    "EXTEND_ACTIONS",
    "MOVE_ACTIONS",
    "deselect",
    "make_extend_action",
    "make_move_action",
    "select_all",
]
