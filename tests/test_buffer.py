from __future__ import annotations

import pytest

from kilo_engine.buffer import Buffer, LineBuffer, RegisterBank, UndoSnapshot
from kilo_engine.errors import OutOfRange
from kilo_engine.layout import Viewport


def make_buffer(*lines: str, width: int = 80, height: int = 24) -> Buffer:
    return Buffer.from_lines(lines, viewport=Viewport(width, height))


def test_delete_sole_line_drains_document() -> None:
    document = LineBuffer.from_lines(["only"])

    removed = document.delete_line(0)

    assert removed == "only"
    assert document.is_empty
    assert document.line_count == 0
    with pytest.raises(OutOfRange):
        document.delete_line(0)


def test_insert_char_recreates_line_in_empty_document() -> None:
    document = LineBuffer()

    document.insert_char(0, 0, "a")

    assert document.snapshot() == ("a",)


def test_line_operations_renumber_following_lines() -> None:
    document = LineBuffer.from_lines(["one", "two", "three"])

    document.insert_line(1, "new")
    document.split_line(0, 1)
    document.delete_line(3)

    assert document.snapshot() == ("o", "ne", "new", "three")


def test_delete_char_and_span_stay_within_line() -> None:
    document = LineBuffer.from_lines(["abc"])

    assert document.delete_char(0, 5) == ""
    assert document.delete_span(0, 1, 10) == "bc"
    assert document.snapshot() == ("a",)


def test_out_of_range_index_raises() -> None:
    document = LineBuffer.from_lines(["abc"])

    with pytest.raises(OutOfRange) as excinfo:
        document.get_line(3)

    assert excinfo.value.index == 3
    assert isinstance(excinfo.value, IndexError)


def test_dirty_counter_resets_on_mark_clean() -> None:
    document = LineBuffer.from_lines(["abc"])
    document.append_to_line(0, "d")
    document.replace_line(0, "x")

    assert document.dirty == 2
    document.mark_clean()
    assert document.dirty == 0


def test_indent_amount_counts_leading_spaces() -> None:
    document = LineBuffer.from_lines(["    code", "plain"])

    assert document.indent_amount(0) == 4
    assert document.indent_amount(1) == 0
    assert LineBuffer().indent_amount(0) == 0


def test_undo_snapshot_restore_is_repeatable() -> None:
    snapshot = UndoSnapshot()
    assert snapshot.restore() is None

    snapshot.capture(["a", "b"])

    assert snapshot.restore() == ("a", "b")
    assert snapshot.restore() == ("a", "b")


def test_undo_snapshot_ignores_empty_documents() -> None:
    snapshot = UndoSnapshot()
    snapshot.capture(["kept"])

    assert snapshot.capture([]) is False
    assert snapshot.restore() == ("kept",)


def test_buffer_restore_snapshot_swaps_lines_back() -> None:
    buffer = make_buffer("first", "second")
    with buffer.transaction("delete"):
        buffer.document.delete_line(0)

    assert buffer.restore_snapshot() is True
    assert buffer.lines == ("first", "second")
    assert buffer.restore_snapshot() is True
    assert buffer.lines == ("first", "second")


def test_each_transaction_replaces_the_undo_copy() -> None:
    buffer = make_buffer("abc")
    with buffer.transaction("first"):
        buffer.document.replace_line(0, "abcd")
    with buffer.transaction("second") as transaction:
        buffer.document.replace_line(0, "abcde")

    assert transaction.changed
    assert buffer.undo.restore() == ("abcd",)


def test_register_bank_line_and_span() -> None:
    registers = RegisterBank()
    assert registers.is_empty()

    assert registers.yank_lines(["a", "b", "c"], 1, 5) == 2
    assert registers.lines == ("b", "c")
    assert registers.get().type == "line"

    assert registers.yank_span("hello", 3, 1) == "ell"
    assert registers.has_text()
    assert registers.get().type == "character"


def test_place_cursor_clamps_normal_and_insert_columns() -> None:
    buffer = make_buffer("abc")

    assert buffer.place_cursor(5, 10) == (0, 2)
    assert buffer.place_cursor(0, 10, insert=True) == (0, 3)


def test_place_cursor_marks_continuation_on_full_row() -> None:
    buffer = make_buffer("abc", "de", width=3)

    buffer.place_cursor(0, 3, insert=True)

    assert buffer.state.continuation is True
    assert buffer.state.cursor == (1, 0)
    assert buffer.logical_cursor() == (0, 3)


def test_place_cursor_scrolls_viewport() -> None:
    buffer = make_buffer(*[f"line {n}" for n in range(10)], height=3)

    buffer.place_cursor(6, 0)

    assert buffer.state.row_offset == 4
    assert buffer.state.cursor == (2, 0)
    buffer.place_cursor(1, 0)
    assert buffer.state.row_offset == 1
    assert buffer.logical_cursor() == (1, 0)


def test_empty_document_cursor_is_origin() -> None:
    buffer = make_buffer()

    assert buffer.place_cursor(3, 3) == (0, 0)
    assert buffer.logical_cursor() == (0, 0)
    assert buffer.line_text(0) == ""


def test_load_resets_state() -> None:
    buffer = make_buffer("old")
    with buffer.transaction("edit"):
        buffer.document.replace_line(0, "changed")

    buffer.load(["fresh", "text"], file_name="notes.md")

    assert buffer.lines == ("fresh", "text")
    assert buffer.document.dirty == 0
    assert buffer.undo.has_snapshot is False
    assert buffer.file_name == "notes.md"
