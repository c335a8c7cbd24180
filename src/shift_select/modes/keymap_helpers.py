"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from shift_select.keymaps.models import make_token
from shift_select.keymaps.notation import KeySpecError, normalize_modifier
from shift_select.keymaps.resolver import KeymapResolver

from .base_mode import KeyInput, ModeContext


def _is_modifier(name: str) -> bool:
    try:
        normalize_modifier(name)
    except KeySpecError:
        return False
    return True


def key_to_token(key: KeyInput) -> str:
    # Modifiers the keymaps cannot express (super, hyper) are dropped.
    modifiers = [mod for mod in key.modifiers if _is_modifier(mod)]
    return make_token(key.key, modifiers)


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


__all__ = [
    "key_to_token",
    "require_keymap_resolver",
]
