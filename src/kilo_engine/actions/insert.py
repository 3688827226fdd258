"""Insert-mode editing: typed text, line splits, and deletions."""

from __future__ import annotations

from kilo_engine import motions
from kilo_engine.keymaps.resolver import ResolutionMatch
from kilo_engine.modes.base_mode import ModeContext, ModeName, ModeResult

from .core import cursor, enter_insert


def _typing(context: ModeContext) -> ModeResult:
    return ModeResult(consumed=True, status="insert")


def insert_text(context: ModeContext, text: str) -> ModeResult:
    buffer = context.buffer
    line, col = cursor(context)
    with buffer.transaction("insert_char"):
        buffer.document.insert_text(line, col, text)
    buffer.place_cursor(line, col + len(text), insert=True)
    return _typing(context)


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``ENTER``: split the line, carrying the indentation when smart indent is on."""

    del match
    buffer = context.buffer
    line, col = cursor(context)
    with buffer.transaction("insert_newline"):
        if buffer.document.is_empty:
            buffer.document.insert_line(0)
        indent = 0
        if buffer.smart_indent:
            indent = motions.indent_amount(buffer.line_text(line))
        buffer.document.split_line(line, col)
        rest = buffer.line_text(line + 1)
        if indent:
            buffer.document.replace_line(line + 1, " " * indent + rest.lstrip(" "))
    buffer.place_cursor(line + 1, indent, insert=True)
    return _typing(context)


def open_line_below(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``o``: new line below, indented like the current one."""

    del match
    return _open_line(context, below=True)


def open_line_above(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _open_line(context, below=False)


def _open_line(context: ModeContext, *, below: bool) -> ModeResult:
    buffer = context.buffer
    line, _ = cursor(context)
    with buffer.transaction("open_line"):
        if buffer.document.is_empty:
            buffer.document.insert_line(0)
            target, indent = 0, 0
        else:
            indent = 0
            if buffer.smart_indent:
                indent = motions.indent_amount(buffer.line_text(line))
            target = line + 1 if below else line
            buffer.document.insert_line(target, " " * indent)
    buffer.place_cursor(target, indent, insert=True)
    return enter_insert(context)


def backspace(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Delete left of the cursor, joining with the previous line at column 0."""

    del match
    buffer = context.buffer
    if buffer.document.is_empty:
        return ModeResult(consumed=True, status="noop")
    line, col = cursor(context)
    if col > 0:
        with buffer.transaction("backspace"):
            buffer.document.delete_char(line, col - 1)
        buffer.place_cursor(line, col - 1, insert=True)
        return _typing(context)
    if line == 0:
        return ModeResult(consumed=True, status="noop")

    joined_at = len(buffer.line_text(line - 1))
    with buffer.transaction("join_lines"):
        buffer.document.append_to_line(line - 1, buffer.line_text(line))
        buffer.document.delete_line(line)
    buffer.place_cursor(line - 1, joined_at, insert=True)
    return _typing(context)


def delete_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    line, col = cursor(context)
    if col >= len(buffer.line_text(line)):
        return ModeResult(consumed=True, status="noop")
    with buffer.transaction("delete_char"):
        buffer.document.delete_char(line, col)
    buffer.place_cursor(line, col, insert=True)
    return _typing(context)


def leave_insert(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``ESC``: back to normal one column left; drop an indent-only line."""

    del match
    buffer = context.buffer
    line, col = cursor(context)
    text = buffer.line_text(line)
    if text and not text.strip(" "):
        with buffer.transaction("strip_indent"):
            buffer.document.replace_line(line, "")
        col = 0
    buffer.place_cursor(line, max(col - 1, 0))
    return ModeResult(
        consumed=True, switch_to=ModeName.NORMAL.value, status="cancel", message=""
    )


__all__ = [
    "backspace",
    "delete_forward",
    "insert_newline",
    "insert_text",
    "leave_insert",
    "open_line_above",
    "open_line_below",
]
