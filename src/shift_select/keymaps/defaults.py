"""Built-in actions and bindings for the normal and selecting modes."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from shift_select.actions import clipboard as clipboard_actions
from shift_select.actions import editing as editing_actions
from shift_select.actions import selection as selection_actions
from shift_select.runtime import telemetry
from shift_select.runtime.config import (
    DEFAULT_KEY_CUT,
    DEFAULT_KEY_PASTE,
    DEFAULT_KEY_SELECT_ALL,
)

from .models import ActionRef, Binding, KeySequence
from .notation import KeySpecError
from .registry import KeymapRegistry

MODES = ("normal", "selecting")

# (key notation, motion) pairs bound to extend actions in both modes.
EXTEND_KEYS: tuple[tuple[str, str], ...] = (
    ("shift+LEFT", "backward_char"),
    ("shift+RIGHT", "forward_char"),
    ("shift+UP", "up_line"),
    ("shift+DOWN", "down_line"),
    ("shift+HOME", "beginning_of_line"),
    ("ctrl+shift+a", "beginning_of_line"),
    ("shift+END", "end_of_line"),
    ("ctrl+shift+e", "end_of_line"),
    ("ctrl+shift+LEFT", "backward_word"),
    ("alt+shift+LEFT", "backward_word"),
    ("ctrl+shift+RIGHT", "forward_word"),
    ("alt+shift+RIGHT", "forward_word"),
    ("ctrl+shift+HOME", "beginning_of_buffer"),
    ("alt+shift+HOME", "beginning_of_buffer"),
    ("ctrl+shift+END", "end_of_buffer"),
    ("alt+shift+END", "end_of_buffer"),
)

# Plain motions, normal mode only; in selecting mode these fall through to
# deselect-and-input and are then replayed here.
MOVE_KEYS: tuple[tuple[str, str], ...] = (
    ("LEFT", "backward_char"),
    ("RIGHT", "forward_char"),
    ("UP", "up_line"),
    ("DOWN", "down_line"),
    ("HOME", "beginning_of_line"),
    ("END", "end_of_line"),
    ("ctrl+LEFT", "backward_word"),
    ("ctrl+RIGHT", "forward_word"),
    ("ctrl+HOME", "beginning_of_buffer"),
    ("ctrl+END", "end_of_buffer"),
)

# (binding suffix, key notation, action id, modes)
FIXED_KEYS: tuple[tuple[str, str, str, tuple[str, ...]], ...] = (
    ("backspace", "BACKSPACE", "edit.delete_backward", MODES),
    ("delete", "DELETE", "edit.delete_forward", MODES),
    ("copy", "ctrl+shift+c", "clipboard.copy", MODES),
    ("deselect", "ESC", "selection.deselect", ("selecting",)),
)

# Logical names a user may rebind -> (action id, default notation)
CONFIGURABLE_KEYS: dict[str, tuple[str, str]] = {
    "SELECT_ALL": ("selection.select_all", DEFAULT_KEY_SELECT_ALL),
    "PASTE": ("clipboard.paste", DEFAULT_KEY_PASTE),
    "CUT": ("clipboard.cut", DEFAULT_KEY_CUT),
}


def default_actions() -> tuple[ActionRef, ...]:
    actions = [
        ActionRef(
            id="selection.select_all",
            handler=selection_actions.select_all,
            description="Select the whole buffer",
        ),
        ActionRef(
            id="selection.deselect",
            handler=selection_actions.deselect,
            description="Drop the keyboard selection",
        ),
        ActionRef(
            id="edit.delete_backward",
            handler=editing_actions.delete_backward,
            description="Delete selection or previous character",
        ),
        ActionRef(
            id="edit.delete_forward",
            handler=editing_actions.delete_forward,
            description="Delete selection or character under cursor",
        ),
        ActionRef(
            id="clipboard.copy",
            handler=clipboard_actions.copy_region,
            description="Copy selection to the clipboard",
        ),
        ActionRef(
            id="clipboard.cut",
            handler=clipboard_actions.cut_region,
            description="Cut selection to the clipboard",
        ),
        ActionRef(
            id="clipboard.paste",
            handler=clipboard_actions.paste_clipboard,
            description="Paste clipboard at the cursor",
        ),
    ]
    for name, handler in selection_actions.MOVE_ACTIONS.items():
        actions.append(
            ActionRef(id=f"motion.{name}", handler=handler, metadata={"motion": name})
        )
    for name, handler in selection_actions.EXTEND_ACTIONS.items():
        actions.append(
            ActionRef(
                id=f"selection.extend_{name}",
                handler=handler,
                metadata={"motion": name},
            )
        )
    return tuple(actions)


def default_bindings(
    keybindings: Optional[Mapping[str, str]] = None,
) -> tuple[Binding, ...]:
    """All built-in bindings; ``keybindings`` overrides the configurable ones."""

    bindings: list[Binding] = []
    for mode in MODES:
        for notation, motion in EXTEND_KEYS:
            bindings.append(
                Binding(
                    id=f"{mode}.extend.{notation}",
                    mode=mode,
                    sequence=KeySequence.from_strings(notation),
                    action_id=f"selection.extend_{motion}",
                )
            )
        for suffix, notation, action_id, modes in FIXED_KEYS:
            if mode in modes:
                bindings.append(
                    Binding(
                        id=f"{mode}.{suffix}",
                        mode=mode,
                        sequence=KeySequence.from_strings(notation),
                        action_id=action_id,
                    )
                )
        for name, (action_id, _default) in CONFIGURABLE_KEYS.items():
            sequence = _configured_sequence(name, keybindings)
            bindings.append(
                Binding(
                    id=f"{mode}.{name.lower()}",
                    mode=mode,
                    sequence=sequence,
                    action_id=action_id,
                    source="config",
                )
            )

    for notation, motion in MOVE_KEYS:
        bindings.append(
            Binding(
                id=f"normal.move.{notation}",
                mode="normal",
                sequence=KeySequence.from_strings(notation),
                action_id=f"motion.{motion}",
            )
        )
    return tuple(bindings)


def _configured_sequence(
    name: str, keybindings: Optional[Mapping[str, str]]
) -> KeySequence:
    default = CONFIGURABLE_KEYS[name][1]
    notation = (keybindings or {}).get(name) or default
    try:
        return KeySequence.parse(notation)
    except KeySpecError as exc:
        telemetry.warn(
            "unusable key notation, using default",
            logger_name="shift_select.keymaps",
            action=name,
            notation=notation,
            error=str(exc),
        )
        return KeySequence.parse(default)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    keybindings: Optional[Mapping[str, str]] = None,
    extra_bindings: Iterable[Binding] | None = None,
    replace: bool = False,
) -> None:
    """Register built-in actions and bindings.

    User-configurable bindings are registered last with ``replace=True`` so
    a configured key takes over any built-in binding it collides with.
    """

    for action in default_actions():
        registry.register_action(action, replace=replace)

    configurable = {f"{mode}.{name.lower()}" for mode in MODES for name in CONFIGURABLE_KEYS}
    deferred: list[Binding] = []
    for binding in default_bindings(keybindings):
        if binding.id in configurable:
            deferred.append(binding)
            continue
        registry.register_binding(binding, replace=replace)
    for binding in deferred:
        registry.register_binding(binding, replace=True)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


__all__ = [
    "CONFIGURABLE_KEYS",
    "EXTEND_KEYS",
    "MOVE_KEYS",
    "default_actions",
    "default_bindings",
    "load_default_keymaps",
]
