"""Declarative keymap registry, key notation, and default bindings."""

from .models import ActionRef, Binding, KeySequence, KeyStroke, make_token
from .notation import KeySpecError, parse_key_spec, split_key_notation
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeySpecError",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
    "load_default_keymaps",
    "make_token",
    "parse_key_spec",
    "split_key_notation",
]
