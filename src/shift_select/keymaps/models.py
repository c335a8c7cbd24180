"""Dataclasses describing keymap bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from .notation import (
    normalize_key,
    normalize_modifier,
    parse_key_spec,
    split_key_notation,
)


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(normalize_modifier(m) for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def make_token(key: str, modifiers: Iterable[str] = ()) -> str:
    """Canonical ``mod+mod+KEY`` form used by the resolver trie."""

    mods = _normalize_modifiers(modifiers)
    key = normalize_key(key)
    if len(key) == 1 and ("ctrl" in mods or "alt" in mods):
        key = key.lower()
    if mods:
        return "+".join(mods) + "+" + key
    return key


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press used by key sequences."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", normalize_key(self.key))
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)

    @classmethod
    def parse(cls, spec: str) -> "KeyStroke":
        key, modifiers = parse_key_spec(spec)
        return cls(key, modifiers)


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable collection of keystrokes."""

    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = 1000

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *keys: str, timeout_ms: int = 1000) -> "KeySequence":
        """Build a sequence from notations, one keystroke per argument."""

        strokes = tuple(KeyStroke.parse(key) for key in keys if key)
        return cls(strokes=strokes, timeout_ms=timeout_ms)

    @classmethod
    def parse(cls, notation: str, *, timeout_ms: int = 1000) -> "KeySequence":
        """Build a sequence from one notation that may hold several keys."""

        return cls.from_strings(*split_key_notation(notation), timeout_ms=timeout_ms)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence with an action in one mode."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "make_token",
]
