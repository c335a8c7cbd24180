"""Adapter boundary types shared between the buffer and host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .state import Span


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing what should be rendered."""

    text: str
    cursor: int
    selection: Optional[Span]
    attributes: dict[str, str] = field(default_factory=dict)


class BufferValidationError(RuntimeError):
    """Raised when a caller provides an out-of-bounds offset."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
