"""Cursor, mark, and region state owned by the host line buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Span = Tuple[int, int]  # (start, end) offsets, start <= end


@dataclass(slots=True)
class BufferState:
    """Mutable CURSOR / MARK / REGION_ACTIVE triple of a line editor."""

    cursor: int = 0
    mark: int = 0
    region_active: bool = False

    def set_cursor(self, offset: int) -> None:
        self.cursor = offset

    def set_mark(self, offset: int) -> None:
        self.mark = offset

    def activate_region(self) -> None:
        self.region_active = True

    def deactivate_region(self) -> None:
        self.region_active = False

    @property
    def region(self) -> Optional[Span]:
        if not self.region_active:
            return None
        return (min(self.mark, self.cursor), max(self.mark, self.cursor))
