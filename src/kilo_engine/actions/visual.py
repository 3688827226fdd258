"""Actions dedicated to the visual modes' highlight management.

Visual line mode highlights whole lines: ``state.highlight`` holds
``(anchor_line, cursor_line)``. Visual char mode highlights a column range of
the cursor line: ``(anchor_col, cursor_col)``.
"""

from __future__ import annotations

from typing import Callable, Sequence, Tuple

from kilo_engine import motions
from kilo_engine.buffer.state import Highlight
from kilo_engine.keymaps.resolver import ResolutionMatch
from kilo_engine.modes.base_mode import ModeContext, ModeName, ModeResult

from .core import cursor, lines, repeat
from .edit import MARKERS, shift_lines

Position = Tuple[int, int]


def _anchor(context: ModeContext, current: int) -> int:
    highlight = context.buffer.state.highlight
    return highlight[0] if highlight else current


def _selection_range(context: ModeContext) -> Highlight | None:
    highlight = context.buffer.state.highlight
    if not highlight:
        return None
    start, end = highlight
    if start <= end:
        return start, end
    return end, start


def _apply_line_selection(context: ModeContext, target: Position) -> ModeResult:
    buffer = context.buffer
    line, col = buffer.place_cursor(*target)
    anchor = _anchor(context, line)
    buffer.state.set_highlight(anchor, line)
    context.bus.emit("visual.selection", {"anchor": anchor, "cursor": (line, col)})
    return ModeResult(consumed=True, status="visual_select")


def _apply_char_selection(context: ModeContext, col: int) -> ModeResult:
    buffer = context.buffer
    line, _ = cursor(context)
    line, col = buffer.place_cursor(line, col)
    anchor = _anchor(context, col)
    buffer.state.set_highlight(anchor, col)
    context.bus.emit("visual.selection", {"anchor": anchor, "cursor": (line, col)})
    return ModeResult(consumed=True, status="visual_select")


def _leave(status: str, message: str | None = "") -> ModeResult:
    return ModeResult(
        consumed=True, switch_to=ModeName.NORMAL.value, status=status, message=message
    )


def extend_line_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    line, col = cursor(context)
    target = motions.vertical(lines(context), line, col, repeat(context), context.buffer.mapper)
    return _apply_line_selection(context, target)


def extend_line_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    line, col = cursor(context)
    target = motions.vertical(lines(context), line, col, -repeat(context), context.buffer.mapper)
    return _apply_line_selection(context, target)


def move_within_line_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    line, col = cursor(context)
    return _apply_line_selection(context, (line, col - repeat(context)))


def move_within_line_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    line, col = cursor(context)
    return _apply_line_selection(context, (line, col + repeat(context)))


def cut_lines(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``x``/``d``: move the highlighted lines into the line register."""

    del match
    selection = _selection_range(context)
    if selection is None:
        return _leave("no_selection")
    start, end = selection
    buffer = context.buffer
    count = context.registers.yank_lines(lines(context), start, end - start + 1)
    with buffer.transaction("visual_delete"):
        for _ in range(count):
            buffer.document.delete_line(start)
    buffer.place_cursor(start, 0)
    context.bus.emit("visual.delete", {"lines": count, "range": (start, end)})
    return _leave("visual_delete")


def yank_lines(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    selection = _selection_range(context)
    if selection is None:
        return _leave("no_selection")
    start, end = selection
    count = context.registers.yank_lines(lines(context), start, end - start + 1)
    context.buffer.place_cursor(start, 0)
    context.bus.emit("visual.yank", {"lines": count, "range": (start, end)})
    return _leave("visual_yank")


def _shift_selection(context: ModeContext, direction: int) -> ModeResult:
    selection = _selection_range(context)
    if selection is None:
        return _leave("no_selection")
    start, end = selection
    shift_lines(context, start, end, direction)
    context.buffer.place_cursor(*motions.first_non_blank(lines(context), start))
    return _leave("indent")


def indent_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _shift_selection(context, 1)


def unindent_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _shift_selection(context, -1)


def _char_motion(
    context: ModeContext, step: Callable[[Sequence[str], int, int], Position]
) -> ModeResult:
    """Apply a word motion but keep the highlight on the cursor line."""

    snapshot = lines(context)
    line, col = cursor(context)
    target = col
    for _ in range(repeat(context)):
        next_line, next_col = step(snapshot, line, target)
        if next_line > line:
            target = len(snapshot[line]) - 1
            break
        if next_line < line:
            target = 0
            break
        target = next_col
    return _apply_char_selection(context, target)


def extend_char_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    _, col = cursor(context)
    return _apply_char_selection(context, max(col - repeat(context), 0))


def extend_char_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    _, col = cursor(context)
    return _apply_char_selection(context, col + repeat(context))


def extend_word_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _char_motion(context, motions.next_word_start)


def extend_word_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _char_motion(context, motions.previous_word_start)


def extend_word_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _char_motion(context, motions.next_word_end)


def extend_line_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_char_selection(context, 0)


def extend_line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    line, _ = cursor(context)
    return _apply_char_selection(context, len(context.buffer.line_text(line)) - 1)


def cut_span(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``x``/``d``: move the highlighted characters into the string register."""

    del match
    selection = _selection_range(context)
    if selection is None:
        return _leave("no_selection")
    start, end = selection
    buffer = context.buffer
    line, _ = cursor(context)
    text = context.registers.yank_span(buffer.line_text(line), start, end)
    with buffer.transaction("visual_delete"):
        buffer.document.delete_span(line, start, end - start + 1)
    buffer.place_cursor(line, start)
    context.bus.emit("visual.delete", {"text": text, "range": (start, end)})
    return _leave("visual_delete")


def yank_span(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    selection = _selection_range(context)
    if selection is None:
        return _leave("no_selection")
    start, end = selection
    line, _ = cursor(context)
    text = context.registers.yank_span(context.buffer.line_text(line), start, end)
    context.buffer.place_cursor(line, start)
    context.bus.emit("visual.yank", {"text": text, "range": (start, end)})
    return _leave("visual_yank")


def decorate_span(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Wrap the highlighted characters in the action's markdown marker."""

    marker = MARKERS[str(match.action.metadata.get("style", "bold"))]
    selection = _selection_range(context)
    if selection is None:
        return _leave("no_selection")
    start, end = selection
    buffer = context.buffer
    line, _ = cursor(context)
    text = buffer.line_text(line)
    if not text:
        return _leave("noop")
    end = min(end, len(text) - 1)
    updated = text[:start] + marker + text[start : end + 1] + marker + text[end + 1 :]
    with buffer.transaction("decorate"):
        buffer.document.replace_line(line, updated)
    buffer.place_cursor(line, start)
    return _leave("decorate")


__all__ = [
    "cut_lines",
    "cut_span",
    "decorate_span",
    "extend_char_left",
    "extend_char_right",
    "extend_line_down",
    "extend_line_end",
    "extend_line_start",
    "extend_line_up",
    "extend_word_backward",
    "extend_word_end",
    "extend_word_forward",
    "indent_selection",
    "move_within_line_left",
    "move_within_line_right",
    "unindent_selection",
    "yank_lines",
    "yank_span",
]
