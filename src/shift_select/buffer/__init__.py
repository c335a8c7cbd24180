"""Host line buffer: text storage, cursor/mark state, and motions."""

from .buffer import BufferDelta, LineBuffer, Transaction
from .motions import MOTIONS, Motion
from .state import BufferState, Span
from .sync import BufferMirror, BufferValidationError
from .validation import clamp_offset, ensure_offset

__all__ = [
    "BufferDelta",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "LineBuffer",
    "MOTIONS",
    "Motion",
    "Span",
    "Transaction",
    "clamp_offset",
    "ensure_offset",
]
