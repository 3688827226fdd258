"""Core action implementations shared across modes: motions and mode entry."""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from kilo_engine import motions
from kilo_engine.keymaps.resolver import ResolutionMatch
from kilo_engine.modes.base_mode import ModeContext, ModeName, ModeResult

Position = Tuple[int, int]


def in_insert(match: Optional[ResolutionMatch]) -> bool:
    return match is not None and match.binding.mode == ModeName.INSERT.value


def repeat(context: ModeContext) -> int:
    return context.pending.repeat


def cursor(context: ModeContext) -> Position:
    return context.buffer.logical_cursor()


def lines(context: ModeContext) -> Sequence[str]:
    return context.buffer.document.snapshot()


def moved(
    context: ModeContext, target: Position, *, insert: bool = False
) -> ModeResult:
    context.buffer.place_cursor(*target, insert=insert)
    return ModeResult(consumed=True, status="motion")


def _repeat_motion(
    context: ModeContext,
    step: Callable[[Sequence[str], int, int], Position],
    *,
    insert: bool = False,
) -> ModeResult:
    snapshot = lines(context)
    line, col = cursor(context)
    for _ in range(repeat(context)):
        line, col = step(snapshot, line, col)
    return moved(context, (line, col), insert=insert)


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    line, col = cursor(context)
    return moved(context, (line, max(col - repeat(context), 0)), insert=in_insert(match))


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    line, col = cursor(context)
    return moved(context, (line, col + repeat(context)), insert=in_insert(match))


def _vertical(context: ModeContext, match: ResolutionMatch, delta: int) -> ModeResult:
    line, col = cursor(context)
    insert = in_insert(match)
    target = motions.vertical(
        lines(context), line, col, delta, context.buffer.mapper, insert=insert
    )
    return moved(context, target, insert=insert)


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _vertical(context, match, repeat(context))


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _vertical(context, match, -repeat(context))


def page_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _vertical(context, match, context.buffer.viewport.height)


def page_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _vertical(context, match, -context.buffer.viewport.height)


def word_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _repeat_motion(context, motions.next_word_start, insert=in_insert(match))


def word_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _repeat_motion(context, motions.previous_word_start, insert=in_insert(match))


def word_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _repeat_motion(context, motions.next_word_end, insert=in_insert(match))


def line_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    line, _ = cursor(context)
    return moved(context, (line, 0), insert=in_insert(match))


def line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    line, _ = cursor(context)
    if in_insert(match):
        return moved(context, (line, len(context.buffer.line_text(line))), insert=True)
    return moved(context, motions.line_end(lines(context), line))


def document_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``G`` jumps to the last line, or to line N with a count."""

    del match
    if context.pending.count is not None:
        return moved(context, motions.goto_line(lines(context), context.pending.count))
    return moved(context, motions.document_end(lines(context)))


def goto_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return moved(context, motions.goto_line(lines(context), repeat(context)))


def search_word(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``*``: remember the word under the cursor and jump to its next use."""

    line, col = cursor(context)
    word = motions.word_under_cursor(context.buffer.line_text(line), col)
    if not word:
        return ModeResult(consumed=True, status="not_found", message="No string under cursor")
    context.buffer.state.search = word
    return search_next(context, match)


def search_next(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    needle = context.buffer.state.search
    if not needle:
        return ModeResult(consumed=True, status="not_found", message="No previous search")
    line, col = cursor(context)
    target = motions.find_next(lines(context), line, col, needle)
    if target is None:
        return ModeResult(
            consumed=True, status="not_found", message=f"Pattern not found: {needle}"
        )
    context.buffer.place_cursor(*target)
    return ModeResult(consumed=True, status="motion", message=f"/{needle}")


def enter_insert(context: ModeContext) -> ModeResult:
    return ModeResult(
        consumed=True, switch_to=ModeName.INSERT.value, message="-- INSERT --"
    )


def insert_before(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return enter_insert(context)


def append_after(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    line, col = cursor(context)
    if context.buffer.line_text(line):
        col += 1
    context.buffer.place_cursor(line, col, insert=True)
    return enter_insert(context)


def append_line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    line, _ = cursor(context)
    context.buffer.place_cursor(line, len(context.buffer.line_text(line)), insert=True)
    return enter_insert(context)


def insert_line_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    line, _ = cursor(context)
    context.buffer.place_cursor(*motions.first_non_blank(lines(context), line), insert=True)
    return enter_insert(context)


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return ModeResult(consumed=True, switch_to=ModeName.COMMAND.value, message=":")


def enter_visual_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return ModeResult(
        consumed=True,
        switch_to=ModeName.VISUAL_LINE.value,
        message="-- VISUAL LINE --",
    )


def enter_visual_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return ModeResult(
        consumed=True, switch_to=ModeName.VISUAL_CHAR.value, message="-- VISUAL --"
    )


def enter_replace_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    # The count is reset once this action returns; the replace mode reads it here.
    context.extras["replace_count"] = repeat(context)
    return ModeResult(consumed=True, switch_to=ModeName.REPLACE_CHAR.value)


def clear_pending(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.pending.reset()
    return ModeResult(consumed=True, status="cancel", message="")


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return ModeResult(
        consumed=True, switch_to=ModeName.NORMAL.value, status="cancel", message=""
    )


def toggle_smart_indent(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.smart_indent = not buffer.smart_indent
    state = "on" if buffer.smart_indent else "off"
    return ModeResult(consumed=True, status="option", message=f"smart indent {state}")


__all__ = [
    "append_after",
    "append_line_end",
    "clear_pending",
    "cursor",
    "document_end",
    "enter_command_mode",
    "enter_insert",
    "enter_replace_char",
    "enter_visual_char",
    "enter_visual_line",
    "exit_to_normal_mode",
    "goto_line",
    "in_insert",
    "insert_before",
    "insert_line_start",
    "line_end",
    "line_start",
    "lines",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "moved",
    "page_down",
    "page_up",
    "repeat",
    "search_next",
    "search_word",
    "toggle_smart_indent",
    "word_backward",
    "word_end",
    "word_forward",
]
