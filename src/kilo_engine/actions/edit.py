"""Normal-mode commands that change the document."""

from __future__ import annotations

from typing import List, Tuple

from kilo_engine import motions
from kilo_engine.errors import EmptyRegister, NoActiveSnapshot
from kilo_engine.keymaps.resolver import ResolutionMatch
from kilo_engine.modes.base_mode import ModeContext, ModeName, ModeResult

from .core import cursor, enter_insert, in_insert, lines, repeat

MARKERS = {"bold": "**", "italic": "*", "code": "`"}
URL_PREFIX = "http"


def _edited(status: str, message: str | None = None) -> ModeResult:
    return ModeResult(consumed=True, status=status, message=message)


def delete_chars(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``x``: delete ``repeat`` characters under the cursor."""

    del match
    buffer = context.buffer
    line, col = cursor(context)
    with buffer.transaction("delete_char"):
        for _ in range(repeat(context)):
            if not buffer.document.delete_char(line, col):
                break
    buffer.place_cursor(line, col)
    return _edited("edit")


def substitute(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``s``: delete ``repeat`` characters and continue in insert mode."""

    del match
    buffer = context.buffer
    line, col = cursor(context)
    with buffer.transaction("substitute"):
        if buffer.document.is_empty:
            buffer.document.insert_line(0)
        else:
            buffer.document.delete_span(line, col, repeat(context))
    buffer.place_cursor(line, col, insert=True)
    return enter_insert(context)


def toggle_case(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``~``: swap the case of ``repeat`` characters and step past them."""

    del match
    buffer = context.buffer
    line, col = cursor(context)
    text = buffer.line_text(line)
    if not text:
        return _edited("noop")
    end = min(col + repeat(context), len(text))
    swapped = text[:col] + text[col:end].swapcase() + text[end:]
    with buffer.transaction("toggle_case"):
        if swapped != text:
            buffer.document.replace_line(line, swapped)
    buffer.place_cursor(line, end)
    return _edited("edit")


def replace_chars(context: ModeContext, ch: str, count: int) -> ModeResult:
    """``r<ch>``: overwrite ``count`` characters, clamped to the line end."""

    buffer = context.buffer
    line, col = cursor(context)
    text = buffer.line_text(line)
    count = min(count, len(text) - col)
    if count <= 0:
        return ModeResult(consumed=True, switch_to=ModeName.NORMAL.value, status="noop")
    with buffer.transaction("replace_char"):
        buffer.document.replace_line(line, text[:col] + ch * count + text[col + count :])
    buffer.place_cursor(line, col + count - 1)
    return ModeResult(consumed=True, switch_to=ModeName.NORMAL.value, status="edit")


def paste(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``p``: the string register after the cursor, else lines below it."""

    del match
    buffer = context.buffer
    registers = context.registers
    if registers.is_empty():
        raise EmptyRegister()

    line, col = cursor(context)
    count = repeat(context)
    if registers.has_text():
        text = registers.text * count
        at = col + 1 if buffer.line_text(line) else 0
        with buffer.transaction("paste_text"):
            buffer.document.insert_text(line, at, text)
        buffer.place_cursor(line, at + len(text) - 1)
        return _edited("paste")

    pasted = list(registers.lines) * count
    at = line + 1 if buffer.lines else 0
    with buffer.transaction("paste_lines"):
        for offset, text in enumerate(pasted):
            buffer.document.insert_line(at + offset, text)
    buffer.place_cursor(*motions.first_non_blank(buffer.lines, at))
    return _edited("paste", _lines_message(len(pasted), "more"))


def undo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if not context.buffer.restore_snapshot():
        raise NoActiveSnapshot()
    context.bus.emit("buffer.undo", context.buffer.name)
    return _edited("undo")


def delete_lines(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``dd``: cut ``repeat`` lines into the line register."""

    del match
    buffer = context.buffer
    snapshot = lines(context)
    if not snapshot:
        return _edited("noop")
    line, _ = cursor(context)
    count = context.registers.yank_lines(snapshot, line, repeat(context))
    with buffer.transaction("delete_lines"):
        for _ in range(count):
            buffer.document.delete_line(line)
    buffer.place_cursor(line, 0)
    return _edited("delete", _lines_message(count, "fewer"))


def yank_lines(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``yy``: copy ``repeat`` lines into the line register."""

    del match
    line, _ = cursor(context)
    count = context.registers.yank_lines(lines(context), line, repeat(context))
    return _edited("yank", _lines_message(count, "yanked", suffix=False))


def _lines_message(count: int, word: str, *, suffix: bool = True) -> str | None:
    if count < 3:
        return None
    if suffix:
        return f"{count} {word} lines"
    return f"{count} lines {word}"


def delete_word(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``dw``: delete through the end of the word and the separator after it."""

    del match
    buffer = context.buffer
    line, col = cursor(context)
    with buffer.transaction("delete_word"):
        for _ in range(repeat(context)):
            text = buffer.line_text(line)
            if col >= len(text):
                break
            end = motions.current_word_end(text, col)
            buffer.document.delete_span(line, col, end - col + 2)
    buffer.place_cursor(line, col)
    return _edited("delete")


def _delete_to_word_end(context: ModeContext, label: str) -> Tuple[int, int]:
    buffer = context.buffer
    line, col = cursor(context)
    with buffer.transaction(label):
        for _ in range(repeat(context)):
            text = buffer.line_text(line)
            if col >= len(text):
                break
            end_line, end = motions.next_word_end(buffer.lines, line, col)
            if end_line != line or end < col:
                end = len(text) - 1
            buffer.document.delete_span(line, col, end - col + 1)
    return line, col


def delete_to_word_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``de``: delete through the end of the word, stopping at the line end."""

    del match
    line, col = _delete_to_word_end(context, "delete_word_end")
    context.buffer.place_cursor(line, col)
    return _edited("delete")


def change_word(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``cw``: like ``de`` but continue in insert mode."""

    del match
    line, col = _delete_to_word_end(context, "change_word")
    context.buffer.place_cursor(line, col, insert=True)
    return enter_insert(context)


def delete_to_line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``d$``: truncate the line; a count also removes the lines after it."""

    del match
    buffer = context.buffer
    if not buffer.lines:
        return _edited("noop")
    line, col = cursor(context)
    extra = min(repeat(context) - 1, buffer.document.line_count - line - 1)
    with buffer.transaction("delete_line_end"):
        text = buffer.line_text(line)
        if col < len(text):
            buffer.document.replace_line(line, text[:col])
        for _ in range(extra):
            buffer.document.delete_line(line + 1)
    buffer.place_cursor(line, col)
    return _edited("delete")


def _delete_a_word(context: ModeContext, label: str) -> Tuple[int, int, bool]:
    buffer = context.buffer
    line, col = cursor(context)
    start = col
    found = False
    with buffer.transaction(label):
        for _ in range(repeat(context)):
            bounds = motions.word_bounds(buffer.line_text(line), start)
            if bounds is None:
                break
            begin, end = bounds
            buffer.document.delete_span(line, begin, end - begin + 1)
            start = begin
            found = True
    return line, start, found


def delete_a_word(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``daw``: delete the word under the cursor and one trailing separator."""

    del match
    line, col, found = _delete_a_word(context, "delete_a_word")
    context.buffer.place_cursor(line, col)
    return _edited("delete" if found else "noop")


def change_a_word(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    line, col, _ = _delete_a_word(context, "change_a_word")
    context.buffer.place_cursor(line, col, insert=True)
    return enter_insert(context)


def shift_lines(context: ModeContext, first: int, last: int, direction: int) -> None:
    """Indent (``direction=1``) or unindent (``-1``) ``first..last`` inclusive."""

    buffer = context.buffer
    width = buffer.indent_width
    with buffer.transaction("indent" if direction > 0 else "unindent"):
        for index in range(first, last + 1):
            text = buffer.line_text(index)
            if not text:
                continue
            if direction > 0:
                shifted = " " * width + text
            else:
                shifted = text[min(motions.indent_amount(text), width) :]
            if shifted != text:
                buffer.document.replace_line(index, shifted)


def _shift_from_cursor(context: ModeContext, direction: int) -> ModeResult:
    buffer = context.buffer
    if not buffer.lines:
        return _edited("noop")
    line, _ = cursor(context)
    last = min(line + repeat(context), buffer.document.line_count) - 1
    shift_lines(context, line, last, direction)
    buffer.place_cursor(*motions.first_non_blank(buffer.lines, line))
    return _edited("indent")


def indent_lines(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _shift_from_cursor(context, 1)


def unindent_lines(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _shift_from_cursor(context, -1)


def toggle_marker(text: str, start: int, end: int, marker: str) -> Tuple[str, int]:
    """Wrap ``text[start:end]`` in ``marker`` or strip it when already wrapped.

    Returns the new line and how far the wrapped text moved.
    """

    size = len(marker)
    inner = text[start:end]
    if start >= size and text[start - size : start] == marker and text[end : end + size] == marker:
        return text[: start - size] + inner + text[end + size :], -size
    if len(inner) > 2 * size and inner.startswith(marker) and inner.endswith(marker):
        return text[:start] + inner[size:-size] + text[end:], -size
    return text[:start] + marker + inner + marker + text[end:], size


def decorate_word(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``Ctrl-B``/``Ctrl-I``/``Ctrl-E``: toggle markdown markers on a word."""

    buffer = context.buffer
    marker = MARKERS[str(match.action.metadata.get("style", "bold"))]
    line, col = cursor(context)
    text = buffer.line_text(line)
    bounds = motions.word_bounds(text, col)
    if bounds is None:
        return _edited("noop")
    updated, shift = toggle_marker(text, bounds[0], bounds[1], marker)
    with buffer.transaction("decorate"):
        buffer.document.replace_line(line, updated)
    buffer.place_cursor(line, max(col + shift, 0), insert=in_insert(match))
    return _edited("decorate")


def _reference_start(snapshot: List[str]) -> int:
    """Index of the first line in the trailing block of ``[n]: url`` lines."""

    index = len(snapshot)
    while index > 0 and snapshot[index - 1].startswith("["):
        index -= 1
    return index


def markup_links(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``Ctrl-H``: turn the first bare URL of each line into a reference link.

    ``see http://x.org now`` becomes ``see [http://x.org][1] now`` and
    ``[1]: http://x.org`` is appended to the reference block at the end.
    """

    del match
    buffer = context.buffer
    snapshot = list(buffer.lines)
    refs_at = _reference_start(snapshot)
    number = len(snapshot) - refs_at + 1
    references: List[str] = []
    updates: List[Tuple[int, str]] = []
    for index, text in enumerate(snapshot[:refs_at]):
        if text.startswith("[") or f"[{URL_PREFIX}" in text:
            continue
        begin = text.find(URL_PREFIX)
        if begin == -1:
            continue
        end = text.find(" ", begin)
        if end == -1:
            end = len(text)
        url = text[begin:end]
        updates.append((index, f"{text[:begin]}[{url}][{number}]{text[end:]}"))
        references.append(f"[{number}]: {url}")
        number += 1

    if not references:
        return _edited("noop", "No links found")

    line, col = cursor(context)
    with buffer.transaction("markup_links"):
        for index, text in updates:
            buffer.document.replace_line(index, text)
        if refs_at == len(snapshot):
            buffer.document.insert_line(buffer.document.line_count, "")
        for reference in references:
            buffer.document.insert_line(buffer.document.line_count, reference)
    buffer.place_cursor(line, col)
    return _edited("links", f"{len(references)} links marked")


__all__ = [
    "MARKERS",
    "change_a_word",
    "change_word",
    "decorate_word",
    "delete_a_word",
    "delete_chars",
    "delete_lines",
    "delete_to_line_end",
    "delete_to_word_end",
    "delete_word",
    "indent_lines",
    "markup_links",
    "paste",
    "replace_chars",
    "shift_lines",
    "toggle_case",
    "toggle_marker",
    "undo",
    "unindent_lines",
    "yank_lines",
]
