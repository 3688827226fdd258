"""Executable Textual app that hosts the editing engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use kilo_engine.adapters.textual.app"
    ) from exc

from rich.text import Text

from kilo_engine.buffer import RenderState
from kilo_engine.config import EngineConfig
from kilo_engine.engine import Engine
from kilo_engine.runtime import telemetry

from .controller import TextualEngineAdapter, TextualUIHooks, visible_rows


def read_lines(path: Path) -> List[str]:
    """Lines of ``path`` without terminators; a missing file is empty."""

    if not path.exists():
        return []
    return path.read_text(encoding="utf-8").splitlines()


def write_lines(path: Path, lines: Sequence[str]) -> None:
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def render_text(state: RenderState) -> Text:
    """Visible rows with the cursor cell shown in reverse video."""

    rows = visible_rows(state)
    row, col = state.cursor
    if row < len(rows) and col >= len(rows[row]):
        rows[row] = rows[row].ljust(col + 1)
    text = Text("\n".join(rows))
    if row < len(rows):
        start = sum(len(line) + 1 for line in rows[:row]) + col
        text.stylize("reverse", start, start + 1)
    return text


@dataclass
class UIState:
    status_text: str = ""
    command_text: str = ""


class KiloEngineApp(App[None]):
    """Full-screen editor: wrapped text area, status line, command line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		content-align: left top;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
	}

	#command-line {
		height: 1;
	}
	"""

    # Ctrl-Q goes to the engine, which warns about unsaved changes first.
    BINDINGS = [
        Binding("ctrl+q", "engine_key('ctrl+q')", "Quit", show=False, priority=True),
    ]

    def __init__(self, *, file_name: Optional[str] = None) -> None:
        super().__init__()
        self._ui_state = UIState()
        self._file_name = file_name
        self.engine = Engine(config=EngineConfig.from_env())
        self.adapter: Optional[TextualEngineAdapter] = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._buffer_widget
        yield self._status_widget
        yield self._command_widget

    async def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            show_command=self._show_command,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEngineAdapter(self.engine, hooks)
        if self._file_name:
            path = Path(self._file_name)
            self.adapter.load(read_lines(path), file_name=self._file_name)
        self._resize_engine()

    def on_resize(self, event: events.Resize) -> None:
        del event
        self._resize_engine()

    async def on_key(self, event: events.Key) -> None:
        event.stop()
        self._forward_key(event.key, event.character)

    def action_engine_key(self, key: str) -> None:
        self._forward_key(key, None)

    def _forward_key(self, key: str, character: Optional[str]) -> None:
        if not self.adapter:
            return
        state = self.adapter.handle_textual_key(key, character=character)
        if state is not None and state.quit_requested:
            self.exit()

    def _resize_engine(self) -> None:
        if not self.adapter:
            return
        width = max(self.size.width, 1)
        # Two rows are reserved for the status and command lines.
        height = max(self.size.height - 2, 1)
        self.adapter.resize(width, height)

    def _update_view(self, state: RenderState) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_text(state))

    def _update_status(self, status: str) -> None:
        self._ui_state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_command(self, command: str) -> None:
        self._ui_state.command_text = command
        if self._command_widget:
            self._command_widget.update(command)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "command.write" and isinstance(payload, dict):
            write_lines(Path(str(payload["file_name"])), payload["lines"])
            telemetry.record_event(
                "host.write", data={"file_name": payload["file_name"]}
            )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the kilo-engine Textual editor.")
    parser.add_argument("file", nargs="?", help="File to open")
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "quiet"),
        default="quiet",
        help="Telemetry preset (default: quiet, nothing printed to the terminal)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    app = KiloEngineApp(file_name=args.file)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
