"""Cursor motions shared by plain movement and selection extension.

Each motion maps ``(text, cursor)`` to a new cursor offset and never
mutates anything. Motions at a boundary return the cursor unchanged.
"""

from __future__ import annotations

from typing import Callable, Dict

Motion = Callable[[str, int], int]


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def line_start(text: str, cursor: int) -> int:
    return text.rfind("\n", 0, cursor) + 1


def line_end(text: str, cursor: int) -> int:
    index = text.find("\n", cursor)
    return len(text) if index == -1 else index


def backward_char(text: str, cursor: int) -> int:
    return max(0, cursor - 1)


def forward_char(text: str, cursor: int) -> int:
    return min(len(text), cursor + 1)


def up_line(text: str, cursor: int) -> int:
    start = line_start(text, cursor)
    if start == 0:
        return cursor
    column = cursor - start
    prev_start = line_start(text, start - 1)
    return min(prev_start + column, start - 1)


def down_line(text: str, cursor: int) -> int:
    end = line_end(text, cursor)
    if end == len(text):
        return cursor
    column = cursor - line_start(text, cursor)
    next_start = end + 1
    return min(next_start + column, line_end(text, next_start))


def beginning_of_line(text: str, cursor: int) -> int:
    return line_start(text, cursor)


def end_of_line(text: str, cursor: int) -> int:
    return line_end(text, cursor)


def backward_word(text: str, cursor: int) -> int:
    index = cursor
    while index > 0 and not _is_word_char(text[index - 1]):
        index -= 1
    while index > 0 and _is_word_char(text[index - 1]):
        index -= 1
    return index


def forward_word(text: str, cursor: int) -> int:
    index = cursor
    size = len(text)
    while index < size and _is_word_char(text[index]):
        index += 1
    while index < size and not _is_word_char(text[index]):
        index += 1
    return index


def beginning_of_buffer(text: str, cursor: int) -> int:
    del text, cursor
    return 0


def end_of_buffer(text: str, cursor: int) -> int:
    del cursor
    return len(text)


MOTIONS: Dict[str, Motion] = {
    "backward_char": backward_char,
    "forward_char": forward_char,
    "up_line": up_line,
    "down_line": down_line,
    "beginning_of_line": beginning_of_line,
    "end_of_line": end_of_line,
    "backward_word": backward_word,
    "forward_word": forward_word,
    "beginning_of_buffer": beginning_of_buffer,
    "end_of_buffer": end_of_buffer,
}


__all__ = ["MOTIONS", "Motion", "line_start", "line_end", *MOTIONS]
