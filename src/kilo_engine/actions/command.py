"""Actions that evaluate Ex-style command lines."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, List, MutableMapping, cast

from kilo_engine.keymaps.resolver import ResolutionMatch
from kilo_engine.modes.base_mode import ModeContext, ModeName, ModeResult
from kilo_engine.runtime import telemetry

CommandHandler = Callable[[ModeContext, List[str]], ModeResult]


def command_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("text", "")
    return state


def _done(status: str, message: str | None = None) -> ModeResult:
    return ModeResult(
        consumed=True, switch_to=ModeName.NORMAL.value, status=status, message=message
    )


def submit_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = command_state(context)
    raw = str(state.get("text", ""))
    text = raw.strip()
    context.bus.emit("command.submit", text)
    state["text"] = ""
    if not text:
        return _done("command_empty", "")
    parts = text.split()
    command = parts[0]
    args = parts[1:]
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _unknown_command(context, text)
    return handler(context, args)


def cancel_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    command_state(context)["text"] = ""
    return _done("command_cancel", "")


def erase_command_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Backspace over the command text; erasing past the colon cancels."""

    del match
    state = command_state(context)
    text = str(state.get("text", ""))
    if not text:
        return _done("command_cancel", "")
    state["text"] = text[:-1]
    return ModeResult(consumed=True, status="editing", message=":" + text[:-1])


def append_command_text(context: ModeContext, text: str) -> ModeResult:
    state = command_state(context)
    state["text"] = str(state.get("text", "")) + text
    return ModeResult(consumed=True, status="editing", message=":" + str(state["text"]))


def _unknown_command(context: ModeContext, command: str) -> ModeResult:
    context.bus.emit("command.error", command)
    return _done("command_error", f"Not an editor command: {command}")


def _write(context: ModeContext, args: List[str]) -> str | None:
    """Publish the buffer for the host to persist; the error text on failure."""

    buffer = context.buffer
    file_name = " ".join(args) or buffer.file_name
    if not file_name:
        return "No file name"

    snapshot = tuple(buffer.lines)
    try:
        context.bus.emit("command.write", {"file_name": file_name, "lines": snapshot})
    except OSError as exc:
        telemetry.record_recovery(exc, where="command.write")
        return f"Can't write \"{file_name}\": {exc}"

    buffer.file_name = file_name
    buffer.document.mark_clean()
    telemetry.record_event(
        "command.write", data={"file_name": file_name, "lines": len(snapshot)}
    )
    return None


def _written_message(context: ModeContext) -> str:
    return f"\"{context.buffer.file_name}\" {context.buffer.document.line_count}L written"


def _quit(context: ModeContext, *, force: bool) -> None:
    context.buffer.state.quit_requested = True
    context.bus.emit("command.quit", {"force": force})


def _handle_write(context: ModeContext, args: List[str]) -> ModeResult:
    failure = _write(context, args)
    if failure is not None:
        return _done("command_error", failure)
    return _done("command_write", _written_message(context))


def _handle_quit(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    del args
    if context.buffer.document.dirty and not force:
        return _done("command_quit_refused", context.buffer.config.quit_refused_message)
    _quit(context, force=force)
    return _done("command_quit_force" if force else "command_quit")


def _handle_write_quit(
    context: ModeContext, args: List[str], *, status: str
) -> ModeResult:
    failure = _write(context, args)
    if failure is not None:
        return _done("command_error", failure)
    _quit(context, force=False)
    return _done(status, _written_message(context))


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "w": _handle_write,
    "write": _handle_write,
    "q": _handle_quit,
    "quit": _handle_quit,
    "q!": partial(_handle_quit, force=True),
    "quit!": partial(_handle_quit, force=True),
    "wq": partial(_handle_write_quit, status="command_wq"),
    "x": partial(_handle_write_quit, status="command_x"),
    "exit": partial(_handle_write_quit, status="command_x"),
}


def save_buffer(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``Ctrl-S``: write to the known file name without leaving the mode."""

    del match
    failure = _write(context, [])
    if failure is not None:
        return ModeResult(consumed=True, status="write_failed", message=failure)
    return ModeResult(consumed=True, status="write", message=_written_message(context))


def quit_editor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``Ctrl-Q``: quit, warning ``quit_times`` times first on unsaved changes.

    Any other key resets the warning count (see ``InsertMode.handle_key``).
    """

    del match
    state = context.buffer.state
    remaining = context.buffer.config.quit_times - state.quit_warnings
    if context.buffer.document.dirty and remaining > 0:
        state.quit_warnings += 1
        return ModeResult(
            consumed=True,
            status="quit_warning",
            message=(
                "WARNING!!! File has unsaved changes. "
                f"Press Ctrl-Q {remaining} more times to quit."
            ),
        )
    state.quit_warnings = 0
    _quit(context, force=True)
    return ModeResult(consumed=True, status="quit")


__all__ = [
    "append_command_text",
    "cancel_command_line",
    "command_state",
    "erase_command_char",
    "quit_editor",
    "save_buffer",
    "submit_command_line",
]
