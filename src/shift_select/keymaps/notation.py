"""Parse the key notations users write in config files.

Supported forms::

    ^A            caret notation, Ctrl+A
    ^?            Backspace
    ^[x           Escape prefix, Alt+x
    ^[[1;2D       xterm modified cursor key (Shift+Left)
    ^[[3~         Delete (optionally ``^[[3;5~``)
    ^[[67;6u      CSI-u / kitty protocol (Ctrl+Shift+C)
    ctrl+shift+LEFT   readable tokens

A caret string may hold several keystrokes (``^X^C``), as may readable
tokens separated by spaces (``ctrl+x ctrl+c``); :func:`split_key_notation`
breaks those apart.
"""

from __future__ import annotations

import re
from typing import Tuple

ParsedKey = Tuple[str, Tuple[str, ...]]

_CSI_CURSOR = re.compile(r"^\^\[\[1;(\d+)([ABCDHF])$")
_CSI_TILDE = re.compile(r"^\^\[\[(\d+)(?:;(\d+))?~$")
_CSI_U = re.compile(r"^\^\[\[(\d+);(\d+)u$")
_CARET_STROKE = re.compile(r"\^\[\[[\d;]*[A-Za-z~]|\^\[(?!\^).|\^\[|\^.|.", re.DOTALL)

_CURSOR_KEYS = {"A": "UP", "B": "DOWN", "C": "RIGHT", "D": "LEFT", "H": "HOME", "F": "END"}
_TILDE_KEYS = {"2": "INSERT", "3": "DELETE", "5": "PAGEUP", "6": "PAGEDOWN"}
_KEY_ALIASES = {
    "ESCAPE": "ESC",
    "RETURN": "ENTER",
    "DEL": "DELETE",
    "BS": "BACKSPACE",
    "PGUP": "PAGEUP",
    "PGDN": "PAGEDOWN",
    "SPACE": " ",
    "PLUS": "+",
}
_MODIFIER_ALIASES = {"control": "ctrl", "meta": "alt", "option": "alt", "opt": "alt"}
MODIFIERS = ("alt", "ctrl", "shift")

NAMED_KEYS = frozenset(
    {"ESC", "ENTER", "TAB", "BACKSPACE"}
    | set(_CURSOR_KEYS.values())
    | set(_TILDE_KEYS.values())
    | {f"F{number}" for number in range(1, 13)}
)


class KeySpecError(ValueError):
    """Raised when a key notation cannot be understood."""


def normalize_modifier(name: str) -> str:
    cleaned = name.strip().lower()
    cleaned = _MODIFIER_ALIASES.get(cleaned, cleaned)
    if cleaned not in MODIFIERS:
        raise KeySpecError(f"Unknown modifier '{name}'")
    return cleaned


def normalize_key(key: str) -> str:
    if len(key) == 1:
        return key
    upper = key.strip().upper()
    return _KEY_ALIASES.get(upper, upper)


def _xterm_modifiers(code: str) -> Tuple[str, ...]:
    # xterm encodes modifiers as 1 + bitmask(shift=1, alt=2, ctrl=4, meta=8).
    mask = int(code) - 1
    if mask < 0:
        raise KeySpecError(f"Invalid modifier code '{code}'")
    result = []
    if mask & 1:
        result.append("shift")
    if mask & (2 | 8):
        result.append("alt")
    if mask & 4:
        result.append("ctrl")
    return tuple(result)


def parse_key_spec(spec: str) -> ParsedKey:
    """Return ``(key, modifiers)`` for a single keystroke notation."""

    if not spec:
        raise KeySpecError("Key notation cannot be empty")
    text = spec.replace("\x1b", "^[")

    if text.startswith("^[["):
        return _parse_csi(spec, text)
    if text.startswith("^[") and len(text) == 3:
        return (text[2], ("alt",))
    if text == "^[":
        return ("ESC", ())
    if text == "^?":
        return ("BACKSPACE", ())
    if text.startswith("^") and len(text) == 2:
        return (text[1].lower(), ("ctrl",))
    return _parse_readable(spec)


def _parse_csi(spec: str, text: str) -> ParsedKey:
    match = _CSI_CURSOR.match(text)
    if match:
        return (_CURSOR_KEYS[match.group(2)], _xterm_modifiers(match.group(1)))
    match = _CSI_TILDE.match(text)
    if match and match.group(1) in _TILDE_KEYS:
        modifiers = _xterm_modifiers(match.group(2)) if match.group(2) else ()
        return (_TILDE_KEYS[match.group(1)], modifiers)
    match = _CSI_U.match(text)
    if match:
        codepoint = int(match.group(1))
        key = {27: "ESC", 13: "ENTER", 9: "TAB", 127: "BACKSPACE"}.get(
            codepoint, chr(codepoint)
        )
        modifiers = _xterm_modifiers(match.group(2))
        if len(key) == 1 and ("ctrl" in modifiers or "alt" in modifiers):
            key = key.lower()
        return (key, modifiers)
    raise KeySpecError(f"Unsupported escape sequence '{spec}'")


def _parse_readable(spec: str) -> ParsedKey:
    if spec == "+":
        return ("+", ())
    parts = spec.split("+")
    if spec.endswith("++"):
        parts = parts[:-2] + ["+"]
    *mods, key = parts
    if not key:
        raise KeySpecError(f"Missing key in '{spec}'")
    modifiers = tuple(normalize_modifier(mod) for mod in mods)
    key = normalize_key(key)
    if len(key) > 1 and key not in NAMED_KEYS:
        raise KeySpecError(f"Unknown key name '{key}' in '{spec}'")
    if len(key) == 1 and ("ctrl" in modifiers or "alt" in modifiers):
        key = key.lower()
    return (key, modifiers)


def split_key_notation(spec: str) -> tuple[str, ...]:
    """Break a notation into one notation per keystroke.

    ``^X^C`` becomes ``("^X", "^C")`` and ``ctrl+x c`` becomes
    ``("ctrl+x", "c")``. Each piece is still validated by
    :func:`parse_key_spec`.
    """

    text = spec.replace("\x1b", "^[")
    if text.startswith("^"):
        strokes = tuple(_CARET_STROKE.findall(text))
    else:
        strokes = tuple(spec.split())
    if not strokes:
        raise KeySpecError("Key notation cannot be empty")
    for stroke in strokes:
        parse_key_spec(stroke)
    return strokes


__all__ = [
    "KeySpecError",
    "MODIFIERS",
    "NAMED_KEYS",
    "normalize_key",
    "normalize_modifier",
    "parse_key_spec",
    "split_key_notation",
]
