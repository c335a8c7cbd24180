"""Executable Textual app hosting a shift-select line editor."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use shift_select.adapters.textual.app"
    ) from exc

from shift_select.buffer import BufferMirror
from shift_select.runtime import telemetry
from shift_select.runtime.config import CLIPBOARD_TYPES, ShiftSelectConfig, load_config
from shift_select.selection import SessionState
from shift_select.modes.mode_manager import ModeManager, create_default_manager

from .controller import TextualShiftSelectAdapter, TextualUIHooks

SELECTION_STYLE = "reverse"
CURSOR_STYLE = "underline bold"


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    history: List[str] = field(default_factory=list)


def render_mirror(mirror: BufferMirror) -> Text:
    """Buffer text with the keyboard selection and cursor styled."""

    text = Text(mirror.text + " ")
    if mirror.selection:
        start, end = mirror.selection
        text.stylize(SELECTION_STYLE, start, end)
    text.stylize(CURSOR_STYLE, mirror.cursor, mirror.cursor + 1)
    return text


def split_textual_key(
    key: str, character: Optional[str]
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """Split a Textual key name such as ``ctrl+shift+left``."""

    if key in {"ctrl+c", "ctrl+q"}:
        return None
    *modifiers, name = key.split("+")
    if not name:
        name = "+"
        modifiers = modifiers[:-1]
    if name == "space":
        name = " "
    elif len(name) > 1:
        name = name.upper()
    if character and len(character) == 1 and character.isprintable():
        if not modifiers or modifiers == ["shift"]:
            return (character, character, ())
    return (name, None, tuple(modifiers))


class ShiftSelectApp(App[None]):
    """Single-line editor demonstrating shift selection and mouse replacement."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#history {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#buffer-view {
		height: 3;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[ShiftSelectConfig] = None) -> None:
        super().__init__()
        self._config = config or load_config()
        self._state = UIState()
        self.manager: ModeManager | None = None
        self.adapter: TextualShiftSelectAdapter | None = None
        self._history_widget: Static | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("shift_select.app")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="editor-area"):
            self._history_widget = Static("", id="history")
            yield self._history_widget
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        session = SessionState.create(config=self._config)
        self.manager = create_default_manager(session)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            accept_line=self._accept_line,
            log=self._log_line,
        )
        self.adapter = TextualShiftSelectAdapter(self.manager, hooks)
        self._update_status(f"clipboard: {session.clipboard.name}")
        self.set_interval(0.1, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = split_textual_key(event.key, event.character)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = mirror.text
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name.startswith("clipboard") and isinstance(payload, dict):
            self._update_status(f"{name}: {payload.get('text')!r}")

    def _accept_line(self, line: str) -> None:
        self._state.history.append(line)
        if self._history_widget:
            self._history_widget.update("\n".join(self._state.history))

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the shift-select Textual line editor."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: $XDG_CONFIG_HOME/shift-select/config)",
    )
    parser.add_argument(
        "--clipboard",
        choices=CLIPBOARD_TYPES,
        default=None,
        help="Override the configured clipboard backend",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="quiet")
    config = load_config(args.config)
    if args.clipboard:
        config = replace(config, clipboard_type=args.clipboard)
    app = ShiftSelectApp(config=config)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
