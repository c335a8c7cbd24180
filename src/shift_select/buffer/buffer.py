"""Line buffer façade: text plus the host's cursor/mark/region state."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from shift_select.runtime import telemetry

from .state import BufferState
from .sync import BufferMirror
from .validation import clamp_offset, ensure_offset


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    cursor: int
    removed: str
    inserted: str
    label: str


class LineBuffer:
    """Single edit buffer in the style of a shell line editor.

    Offsets are character indexes into ``text``. Every splice goes through
    :meth:`replace_range`, which bumps ``version`` and leaves the cursor
    after the inserted text.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self._text = text
        self.version = 0
        self.state = state or BufferState(cursor=len(text))

    @classmethod
    def from_text(
        cls, text: str, *, cursor: Optional[int] = None, name: str = "default"
    ) -> "LineBuffer":
        buffer = cls(text, name=name)
        if cursor is not None:
            buffer.set_cursor(cursor)
        return buffer

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    @property
    def cursor(self) -> int:
        return self.state.cursor

    def set_cursor(self, offset: int) -> int:
        self.state.set_cursor(ensure_offset(self._text, offset))
        return self.state.cursor

    def move_cursor(self, offset: int) -> int:
        """Clamping variant of :meth:`set_cursor` used by motions."""

        self.state.set_cursor(clamp_offset(self._text, offset))
        return self.state.cursor

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self._text,
            cursor=self.state.cursor,
            selection=self.state.region,
            attributes=dict(attributes or {}),
        )

    def replace_range(
        self, start: int, end: int, text: str, *, label: str
    ) -> BufferDelta:
        start = ensure_offset(self._text, start)
        end = ensure_offset(self._text, end)
        if start > end:
            start, end = end, start
        with Transaction(self, label):
            removed = self._text[start:end]
            self._text = self._text[:start] + text + self._text[end:]
            self.version += 1
            self.state.set_cursor(start + len(text))
            self.state.set_mark(clamp_offset(self._text, self.state.mark))

        return BufferDelta(
            version=self.version,
            text=self._text,
            cursor=self.state.cursor,
            removed=removed,
            inserted=text,
            label=label,
        )

    def insert_text(self, text: str, *, at: Optional[int] = None) -> BufferDelta:
        position = self.state.cursor if at is None else at
        return self.replace_range(position, position, text, label="insert_text")

    def delete_range(self, start: int, end: int) -> BufferDelta:
        return self.replace_range(start, end, "", label="delete_range")

    def get_text_range(self, start: int, end: int) -> str:
        start = ensure_offset(self._text, start)
        end = ensure_offset(self._text, end)
        if start > end:
            start, end = end, start
        return self._text[start:end]

    def set_text(self, text: str, *, cursor: Optional[int] = None) -> BufferDelta:
        """Replace the whole buffer, as a host does when recalling history."""

        delta = self.replace_range(0, len(self._text), text, label="set_text")
        if cursor is not None:
            self.set_cursor(cursor)
            delta.cursor = self.state.cursor
        return delta


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: LineBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name, "version": self.buffer.version},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
