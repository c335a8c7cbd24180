"""Typing and deletion actions that reconcile keyboard and mouse selections.

Precedence is the same everywhere: an active keyboard selection wins and
the pending mouse selection is left alone; otherwise a pending mouse
selection is consumed at most once; otherwise the key acts normally.
"""

from __future__ import annotations

from typing import Optional

from shift_select.modes.base_mode import ModeContext, ModeResult


def consume_mouse_text(context: ModeContext) -> Optional[str]:
    """Delete the pending mouse selection from the buffer, if consumable."""

    selection = context.selection
    text = selection.consume_mouse_selection()
    if text is None:
        return None
    start = selection.remove_first_occurrence(text)
    context.bus.emit("mouse.consumed", {"text": text, "start": start})
    return text


def _delete_keyboard_selection(context: ModeContext, *, label: str) -> Optional[str]:
    removed = context.selection.delete_selected(label=label)
    if removed is not None:
        context.bus.emit("edit.delete", {"text": removed, "source": "keyboard"})
        context.bus.emit("selection.cleared", {"reason": label})
    return removed


def type_text(context: ModeContext, text: str) -> ModeResult:
    """Insert typed text, replacing whichever selection is active."""

    context.session.tracker.refresh()
    if context.selection.is_active:
        _delete_keyboard_selection(context, label="replace_selection")
        status = "replace_selection"
    elif consume_mouse_text(context) is not None:
        status = "replace_mouse"
    else:
        status = "insert"

    buffer = context.buffer
    buffer.insert_text(text)
    context.bus.emit("edit.insert", {"text": text, "cursor": buffer.cursor})
    return ModeResult(consumed=True, switch_to="normal", status=status, message=text)


def delete_backward(context: ModeContext, match: object) -> ModeResult:
    del match
    context.session.tracker.refresh()
    return _delete(context, forward=False)


def delete_forward(context: ModeContext, match: object) -> ModeResult:
    del match
    return _delete(context, forward=True)


def _delete(context: ModeContext, *, forward: bool) -> ModeResult:
    removed = _delete_keyboard_selection(context, label="kill_region")
    if removed is not None:
        return ModeResult(
            consumed=True, switch_to="normal", status="kill_region", message=removed
        )

    removed = consume_mouse_text(context)
    if removed is not None:
        return ModeResult(
            consumed=True, switch_to="normal", status="delete_mouse", message=removed
        )

    buffer = context.buffer
    cursor = buffer.cursor
    if forward and cursor < len(buffer):
        delta = buffer.delete_range(cursor, cursor + 1)
    elif not forward and cursor > 0:
        delta = buffer.delete_range(cursor - 1, cursor)
    else:
        return ModeResult(consumed=True, status="nothing_to_delete")
    context.bus.emit("edit.delete", {"text": delta.removed, "source": "char"})
    return ModeResult(consumed=True, status="delete_char", message=delta.removed)


def deselect_and_input(context: ModeContext) -> ModeResult:
    """Fallback for keys with no binding while selecting."""

    context.selection.clear()
    context.bus.emit("selection.cleared", {"reason": "unbound_key"})
    return ModeResult(
        consumed=False,
        switch_to="normal",
        status="deselect_and_input",
        redispatch=True,
    )


__all__ = [
    "consume_mouse_text",
    "delete_backward",
    "delete_forward",
    "deselect_and_input",
    "type_text",
]
