"""Copy, cut, and paste between the buffer and the system clipboard."""

from __future__ import annotations

from shift_select.modes.base_mode import ModeContext, ModeResult
from shift_select.runtime import telemetry

from .editing import consume_mouse_text

logger_name = "shift_select.actions"


def _write(context: ModeContext, text: str, *, source: str) -> bool:
    stored = context.session.clipboard.write_clipboard(text)
    if not stored:
        telemetry.record_event(
            "clipboard.unavailable",
            data={"backend": context.session.clipboard.name, "source": source},
            logger_name=logger_name,
        )
    return stored


def copy_region(context: ModeContext, match: object) -> ModeResult:
    del match
    selection = context.selection
    text = selection.selected_text()
    if text is not None:
        _write(context, text, source="keyboard")
        selection.clear()
        context.bus.emit("clipboard.copy", {"text": text, "source": "keyboard"})
        context.bus.emit("selection.cleared", {"reason": "copy"})
        return ModeResult(consumed=True, switch_to="normal", status="copy", message=text)

    # Copy reflects whatever is highlighted now, new or not.
    tracker = context.session.tracker
    tracker.refresh()
    text = tracker.current_text()
    if not text:
        return ModeResult(consumed=True, switch_to="normal", status="no_selection")
    _write(context, text, source="mouse")
    selection.mark_mouse_consumed(text)
    context.bus.emit("clipboard.copy", {"text": text, "source": "mouse"})
    return ModeResult(
        consumed=True, switch_to="normal", status="copy_mouse", message=text
    )


def cut_region(context: ModeContext, match: object) -> ModeResult:
    del match
    selection = context.selection
    text = selection.selected_text()
    if text is not None:
        _write(context, text, source="keyboard")
        selection.delete_selected(label="cut")
        context.bus.emit("clipboard.cut", {"text": text, "source": "keyboard"})
        context.bus.emit("selection.cleared", {"reason": "cut"})
        return ModeResult(consumed=True, switch_to="normal", status="cut", message=text)

    context.session.tracker.refresh()
    text = consume_mouse_text(context)
    if text is None:
        return ModeResult(consumed=True, switch_to="normal", status="no_selection")
    _write(context, text, source="mouse")
    context.bus.emit("clipboard.cut", {"text": text, "source": "mouse"})
    return ModeResult(consumed=True, switch_to="normal", status="cut_mouse", message=text)


def paste_clipboard(context: ModeContext, match: object) -> ModeResult:
    """Paste at the cursor. A mouse selection is never replaced by paste."""

    del match
    selection = context.selection
    replaced = selection.delete_selected(label="paste_replace")
    if replaced is not None:
        context.bus.emit("selection.cleared", {"reason": "paste"})

    text = context.session.clipboard.read_clipboard()
    if not text:
        return ModeResult(consumed=True, switch_to="normal", status="clipboard_empty")
    context.buffer.insert_text(text)
    context.bus.emit("clipboard.paste", {"text": text, "replaced": replaced})
    return ModeResult(consumed=True, switch_to="normal", status="paste", message=text)


__all__ = ["copy_region", "cut_region", "paste_clipboard"]
