from __future__ import annotations

from kilo_engine import motions
from kilo_engine.layout import WrapMapper


def test_next_word_start_within_line() -> None:
    assert motions.next_word_start(["hello world"], 0, 0) == (0, 6)
    assert motions.next_word_start(["a, b"], 0, 0) == (0, 3)


def test_next_word_start_continues_on_next_line() -> None:
    lines = ["hello world", "", "next"]

    assert motions.next_word_start(lines, 0, 6) == (2, 0)


def test_next_word_start_stays_on_last_word() -> None:
    assert motions.next_word_start(["hello world"], 0, 6) == (0, 6)


def test_previous_word_start() -> None:
    lines = ["ab cd", "xy"]

    assert motions.previous_word_start(["hello world"], 0, 8) == (0, 6)
    assert motions.previous_word_start(["hello world"], 0, 6) == (0, 0)
    assert motions.previous_word_start(lines, 1, 0) == (0, 3)
    assert motions.previous_word_start(lines, 0, 0) == (0, 0)


def test_next_word_end() -> None:
    assert motions.next_word_end(["hello world"], 0, 0) == (0, 4)
    assert motions.next_word_end(["hello world"], 0, 4) == (0, 10)
    assert motions.next_word_end(["hi", "there"], 0, 1) == (1, 4)


def test_word_classification_uses_code_point_threshold() -> None:
    assert motions.is_word_char("_")
    assert motions.is_word_char(":")
    assert not motions.is_word_char(".")
    assert not motions.is_word_char(" ")
    assert motions.word_under_cursor("foo.bar", 1) == "foo"
    assert motions.word_under_cursor("foo.bar", 3) == ""


def test_word_bounds_and_current_end() -> None:
    assert motions.word_bounds("hello world", 7) == (6, 11)
    assert motions.word_bounds("hello world", 5) is None
    assert motions.current_word_end("hello world", 0) == 4
    assert motions.current_word_end("hello world", 4) == 4


def test_find_next_wraps_around() -> None:
    lines = ["foo bar", "baz foo"]

    assert motions.find_next(lines, 0, 0, "foo") == (1, 4)
    assert motions.find_next(lines, 1, 4, "foo") == (0, 0)
    assert motions.find_next(["foo"], 0, 0, "foo") == (0, 0)
    assert motions.find_next(lines, 0, 0, "qux") is None
    assert motions.find_next(lines, 0, 0, "") is None


def test_vertical_clamps_to_target_row() -> None:
    mapper = WrapMapper(80)
    lines = ["abcdef", "ab"]

    assert motions.vertical(lines, 0, 5, 1, mapper) == (1, 1)
    assert motions.vertical(lines, 0, 5, 1, mapper, insert=True) == (1, 2)
    assert motions.vertical(lines, 1, 1, 5, mapper) == (1, 1)


def test_vertical_keeps_visual_column_on_wrapped_lines() -> None:
    mapper = WrapMapper(3)
    lines = ["abcdef", "ghijkl"]

    assert motions.vertical(lines, 0, 4, 1, mapper) == (1, 1)


def test_line_jumps() -> None:
    lines = ["a", "  b", "c"]

    assert motions.goto_line(lines, 10) == (2, 0)
    assert motions.goto_line(lines, 2) == (1, 0)
    assert motions.document_end(lines) == (2, 0)
    assert motions.document_end([]) == (0, 0)
    assert motions.first_non_blank(lines, 1) == (1, 2)
    assert motions.line_end(lines, 1) == (1, 2)
    assert motions.line_end(["", "x"], 0) == (0, 0)
