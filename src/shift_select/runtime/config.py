"""User configuration: a plain ``KEY="value"`` file plus environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, Mapping, Optional

from . import telemetry

CONFIG_PREFIX = "SHIFT_SELECT_"
CLIPBOARD_TYPES = ("auto", "wayland", "x11", "none")

DEFAULT_KEY_SELECT_ALL = "^A"
DEFAULT_KEY_PASTE = "^V"
DEFAULT_KEY_CUT = "^X"

# config file key -> ShiftSelectConfig attribute
_KEY_FIELDS: Dict[str, str] = {
    "SHIFT_SELECT_CLIPBOARD_TYPE": "clipboard_type",
    "SHIFT_SELECT_MOUSE_REPLACEMENT": "mouse_replacement",
    "SHIFT_SELECT_KEY_SELECT_ALL": "key_select_all",
    "SHIFT_SELECT_KEY_PASTE": "key_paste",
    "SHIFT_SELECT_KEY_CUT": "key_cut",
}

logger_name = "shift_select.config"


@dataclass(frozen=True, slots=True)
class ShiftSelectConfig:
    clipboard_type: str = "auto"
    mouse_replacement: bool = True
    key_select_all: str = DEFAULT_KEY_SELECT_ALL
    key_paste: str = DEFAULT_KEY_PASTE
    key_cut: str = DEFAULT_KEY_CUT

    def keybindings(self) -> Dict[str, str]:
        """Logical action name -> key notation string."""

        return {
            "SELECT_ALL": self.key_select_all,
            "PASTE": self.key_paste,
            "CUT": self.key_cut,
        }


def default_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "shift-select" / "config"


def parse_config_text(text: str) -> Dict[str, str]:
    """Parse ``KEY="value"`` lines; comments and blank lines are skipped."""

    values: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export ") :].strip()
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key] = value
    return values


def load_config(
    path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> ShiftSelectConfig:
    """Build the effective configuration.

    Values come from the config file, then from environment variables with
    the same names. Invalid entries are reported and fall back to defaults.
    """

    env = os.environ if environ is None else environ
    config_path = path or default_config_path(env)
    raw: Dict[str, str] = {}
    if config_path.is_file():
        try:
            raw.update(parse_config_text(config_path.read_text(encoding="utf-8")))
        except OSError as exc:
            telemetry.warn(
                "config file unreadable",
                logger_name=logger_name,
                path=str(config_path),
                error=str(exc),
            )
    for key in _KEY_FIELDS:
        if key in env:
            raw[key] = env[key]

    config = ShiftSelectConfig()
    changes: Dict[str, object] = {}
    for key, value in raw.items():
        attr = _KEY_FIELDS.get(key)
        if attr is None:
            continue
        coerced = _coerce(attr, value)
        if coerced is None:
            telemetry.warn(
                "invalid config value",
                logger_name=logger_name,
                key=key,
                value=value,
            )
            continue
        changes[attr] = coerced

    config = replace(config, **changes)
    telemetry.record_event(
        "config.loaded",
        data={f.name: getattr(config, f.name) for f in fields(config)},
        logger_name=logger_name,
    )
    return config


def _coerce(attr: str, value: str) -> object | None:
    if attr == "clipboard_type":
        lowered = value.strip().lower()
        return lowered if lowered in CLIPBOARD_TYPES else None
    if attr == "mouse_replacement":
        lowered = value.strip().lower()
        if lowered in {"enabled", "1", "true", "yes", "on"}:
            return True
        if lowered in {"disabled", "0", "false", "no", "off"}:
            return False
        return None
    # Key notation is validated when the bindings are built.
    return value if value else None


def save_config_value(key: str, value: str, *, path: Optional[Path] = None) -> Path:
    """Update ``key`` in the config file, appending it when missing."""

    if key not in _KEY_FIELDS:
        raise KeyError(f"Unknown config key '{key}'")
    config_path = path or default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    entry = f'{key}="{value}"'

    lines: list[str] = []
    if config_path.is_file():
        lines = config_path.read_text(encoding="utf-8").splitlines()

    for index, line in enumerate(lines):
        if line.strip().startswith(f"{key}="):
            lines[index] = entry
            break
    else:
        lines.append(entry)

    tmp_path = config_path.with_name(config_path.name + ".tmp")
    tmp_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    tmp_path.replace(config_path)
    return config_path


def reset_config(*, path: Optional[Path] = None) -> bool:
    """Remove the config file. Returns whether a file was removed."""

    config_path = path or default_config_path()
    try:
        config_path.unlink()
    except FileNotFoundError:
        return False
    return True


__all__ = [
    "CLIPBOARD_TYPES",
    "ShiftSelectConfig",
    "default_config_path",
    "load_config",
    "parse_config_text",
    "reset_config",
    "save_config_value",
]
