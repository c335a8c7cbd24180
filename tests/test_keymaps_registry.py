import pytest

from shift_select.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    sequence: KeySequence | None = None,
    action_id: str = "core.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or make_sequence("shift+LEFT"),
        action_id=action_id,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="normal.extend")

    registry.register_binding(binding)

    assert registry.get_binding("normal.extend") is binding
    assert list(registry.iter_bindings(mode="normal")) == [binding]


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.extend"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.extend"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="normal.extend.duplicate"))


def test_same_keys_in_other_mode_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="normal.extend"))
    registry.register_binding(make_binding(binding_id="selecting.extend", mode="selecting"))

    assert registry.binding_for_keys("normal", "shift+LEFT").id == "normal.extend"
    assert registry.binding_for_keys("selecting", "shift+LEFT").id == "selecting.extend"


def test_register_binding_with_replace_evicts_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_action(make_action("core.other"))

    first = make_binding(binding_id="first")
    second = make_binding(binding_id="second", action_id="core.other")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]


def test_load_default_keymaps_binds_both_modes() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.get_binding("normal.select_all").sequence.tokens == ("ctrl+a",)
    assert registry.get_binding("selecting.paste").sequence.tokens == ("ctrl+v",)
    assert registry.get_binding("selecting.cut").sequence.tokens == ("ctrl+x",)
    assert registry.get_binding("selecting.deselect").sequence.tokens == ("ESC",)
    extend = registry.get_binding("selecting.extend.shift+LEFT")
    assert extend.action_id == "selection.extend_backward_char"
    with pytest.raises(KeyError):
        registry.get_binding("selecting.move.LEFT")


def test_load_default_keymaps_uses_configured_keys() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(
        registry,
        keybindings={"SELECT_ALL": "^[[1;5H", "PASTE": "^Y", "CUT": "^X"},
    )

    binding = registry.get_binding("normal.select_all")
    assert binding.sequence.tokens == ("ctrl+HOME",)
    assert binding.source == "config"
    # The configured key took over the built-in ctrl+HOME motion.
    with pytest.raises(KeyError):
        registry.get_binding("normal.move.ctrl+HOME")
    assert registry.get_binding("normal.paste").sequence.tokens == ("ctrl+y",)


def test_load_default_keymaps_falls_back_on_bad_notation() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, keybindings={"CUT": "^[[99;9Z"})

    assert registry.get_binding("normal.cut").sequence.tokens == ("ctrl+x",)



def test_replace_same_id_moves_binding_to_new_keys() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.cut"))
    before = registry.revision()

    registry.register_binding(
        make_binding(binding_id="normal.cut", sequence=make_sequence("^X")),
        replace=True,
    )

    assert registry.revision() == before + 1
    assert registry.binding_for_keys("normal", "shift+LEFT") is None
    assert registry.binding_for_keys("normal", "ctrl+x").id == "normal.cut"


def test_load_default_keymaps_accepts_multi_key_notation() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, keybindings={"CUT": "^X^C"})

    assert registry.get_binding("selecting.cut").sequence.tokens == (
        "ctrl+x",
        "ctrl+c",
    )
