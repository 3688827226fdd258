from __future__ import annotations

import pytest

from kilo_engine.errors import OutOfRange
from kilo_engine.layout import Viewport, VisualRow, WrapMapper


def make_mapper(width: int = 3) -> WrapMapper:
    return WrapMapper(width)


def test_row_count_wraps_long_lines() -> None:
    mapper = make_mapper()

    assert mapper.row_count("") == 1
    assert mapper.row_count("abc") == 1
    assert mapper.row_count("abcd") == 2
    assert mapper.total_rows(["abcde", "", "ab"]) == 4


def test_position_of_wrapped_column() -> None:
    mapper = make_mapper()
    lines = ["abcde", "x"]

    assert mapper.visual_position_of(lines, 0, 4) == (1, 1)
    assert mapper.visual_position_of(lines, 1, 0) == (2, 0)
    assert mapper.logical_line_of(lines, 1) == 0
    assert mapper.logical_line_of(lines, 2) == 1
    assert mapper.logical_column_of(lines, 1, 1) == 4


def test_positions_map_back_to_themselves() -> None:
    mapper = make_mapper()
    lines = ["abcdefg", "", "hi", "jklmno"]

    for line, text in enumerate(lines):
        for col in range(max(len(text), 1)):
            row, visual_col = mapper.visual_position_of(lines, line, col)
            assert mapper.logical_line_of(lines, row) == line
            assert mapper.logical_column_of(lines, row, visual_col) == col


def test_continuation_row_resolves_to_line_above() -> None:
    mapper = make_mapper()
    lines = ["abc", "de"]

    assert mapper.is_continuation("abc", 3) is True
    assert mapper.is_continuation("ab", 2) is False
    assert mapper.logical_line_of(lines, 1) == 1
    assert mapper.logical_line_of(lines, 1, continuation=True) == 0
    assert mapper.logical_column_of(lines, 1, 0, continuation=True) == 3


def test_rows_past_the_end_clamp_to_last_line() -> None:
    mapper = make_mapper()

    assert mapper.logical_line_of(["abc", "de"], 10) == 1
    assert mapper.logical_line_of([], 4) == 0
    assert mapper.visual_position_of([], 0, 0) == (0, 0)


def test_first_row_of_accepts_one_past_last_line() -> None:
    mapper = make_mapper()
    lines = ["abcde", "x"]

    assert mapper.first_row_of(lines, 1) == 2
    assert mapper.first_row_of(lines, 2) == 3
    with pytest.raises(OutOfRange):
        mapper.first_row_of(lines, 3)


def test_invalid_positions_raise_out_of_range() -> None:
    mapper = make_mapper()

    with pytest.raises(OutOfRange):
        mapper.visual_position_of(["abc"], 1, 0)
    with pytest.raises(OutOfRange):
        mapper.visual_position_of(["abc"], 0, -1)
    with pytest.raises(OutOfRange):
        mapper.logical_line_of(["abc"], -1)


def test_visual_rows_and_segments() -> None:
    mapper = make_mapper()

    assert mapper.visual_rows(["abcde", ""]) == [
        VisualRow(line=0, segment=0, text="abc"),
        VisualRow(line=0, segment=1, text="de"),
        VisualRow(line=1, segment=0, text=""),
    ]
    assert mapper.segment_length("abcde", 4) == 2
    assert mapper.segment_length("abcde", 0) == 3


def test_dimensions_must_be_positive() -> None:
    with pytest.raises(ValueError):
        WrapMapper(0)
    with pytest.raises(ValueError):
        Viewport(0, 10)
    assert Viewport().width == 80
