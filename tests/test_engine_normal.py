from __future__ import annotations

from typing import Sequence

from kilo_engine import Engine


def make_engine(*lines: str, **kwargs: object) -> Engine:
    return Engine(lines, **kwargs)  # type: ignore[arg-type]


def lines_of(engine: Engine) -> Sequence[str]:
    return engine.serialize_text()


def test_counted_delete_lines_fills_register() -> None:
    engine = make_engine("l0", "l1", "l2", "l3", "l4")

    state = engine.feed("3dd")

    assert state.lines == ("l3", "l4")
    assert engine.buffer.registers.lines == ("l0", "l1", "l2")
    assert state.logical_cursor == (0, 0)
    assert state.status == "3 fewer lines"
    assert state.dirty is True


def test_delete_last_line_empties_document() -> None:
    engine = make_engine("only")

    state = engine.feed("dd")

    assert state.lines == ()
    assert engine.feed("dd").lines == ()
    assert engine.feed("u").lines == ("only",)


def test_delete_word() -> None:
    engine = make_engine("hello world")

    assert engine.feed("dw").lines == ("world",)


def test_delete_to_word_end_and_line_end() -> None:
    engine = make_engine("hello world")
    assert engine.feed("de").lines == (" world",)

    engine = make_engine("hello world")
    state = engine.feed("wd$")
    assert state.lines == ("hello ",)
    assert state.logical_cursor == (0, 5)

    engine = make_engine("abc", "def", "ghi")
    assert engine.feed("l2d$").lines == ("a", "ghi")


def test_delete_a_word() -> None:
    engine = make_engine("one two three")

    state = engine.feed("wdaw")

    assert state.lines == ("one three",)
    assert state.logical_cursor == (0, 4)


def test_delete_chars_with_count() -> None:
    engine = make_engine("abcdef")

    assert engine.feed("2x").lines == ("cdef",)
    assert engine.buffer.registers.is_empty()


def test_toggle_case_steps_right() -> None:
    engine = make_engine("abc")

    state = engine.feed("~")

    assert state.lines == ("Abc",)
    assert state.logical_cursor == (0, 1)


def test_yank_and_paste_lines() -> None:
    engine = make_engine("a", "b")

    state = engine.feed("yyp")

    assert state.lines == ("a", "a", "b")
    assert state.logical_cursor == (1, 0)
    assert engine.feed("2p").lines == ("a", "a", "a", "a", "b")


def test_paste_with_empty_register_reports_status() -> None:
    engine = make_engine("a")

    state = engine.feed("p")

    assert engine.last_result is not None
    assert engine.last_result.status == "empty_register"
    assert state.status == "Nothing in register"
    assert state.lines == ("a",)


def test_undo_without_snapshot_reports_status() -> None:
    engine = make_engine("a")

    state = engine.feed("u")

    assert engine.last_result is not None
    assert engine.last_result.status == "no_snapshot"
    assert state.status == "Already at oldest change"


def test_undo_is_single_level() -> None:
    engine = make_engine("one", "two", "three")
    engine.feed("dd")
    engine.feed("dd")

    assert engine.feed("u").lines == ("two", "three")
    assert engine.feed("u").lines == ("two", "three")


def test_counts_apply_to_motions() -> None:
    engine = make_engine("abcdef", "x", "y", "z")

    assert engine.feed("3l").logical_cursor == (0, 3)
    assert engine.feed("2j").logical_cursor == (2, 0)
    assert engine.feed("gg").logical_cursor == (0, 0)
    assert engine.feed("G").logical_cursor == (3, 0)
    assert engine.feed("2G").logical_cursor == (1, 0)
    assert engine.feed("3gg").logical_cursor == (2, 0)
    assert engine.feed("$").logical_cursor == (2, 0)


def test_pending_keys_are_rendered_and_aborted() -> None:
    engine = make_engine("a", "b")

    assert engine.feed("2d").pending == "2d"

    state = engine.feed("j")

    assert state.lines == ("a", "b")
    assert state.logical_cursor == (1, 0)
    assert state.pending == ""


def test_escape_discards_pending_keys() -> None:
    engine = make_engine("a", "b")
    engine.feed("3d")

    state = engine.feed(["ESC"])

    assert state.pending == ""
    assert engine.feed("d").pending == "d"


def test_unknown_key_is_absorbed() -> None:
    engine = make_engine("a")

    state = engine.feed("Q")

    assert engine.last_result is not None
    assert engine.last_result.status == "unresolved"
    assert state.mode == "normal"


def test_search_word_under_cursor_and_repeat() -> None:
    engine = make_engine("foo bar", "foo")

    state = engine.feed("*")
    assert state.logical_cursor == (1, 0)
    assert state.status == "/foo"

    assert engine.feed("n").logical_cursor == (0, 0)


def test_search_without_word_or_match() -> None:
    engine = make_engine(" x")
    assert engine.feed("n").status == "No previous search"
    assert engine.feed("*").status == "No string under cursor"


def test_replace_chars_with_count() -> None:
    engine = make_engine("abcdef")

    state = engine.feed("3rx")

    assert state.lines == ("xxxdef",)
    assert state.logical_cursor == (0, 2)
    assert state.mode == "normal"


def test_replace_cancelled_by_escape() -> None:
    engine = make_engine("abc")
    engine.feed("r")
    assert engine.mode == "replace_char"

    state = engine.feed(["ESC"])

    assert state.mode == "normal"
    assert state.lines == ("abc",)


def test_indent_and_unindent_lines() -> None:
    engine = make_engine("x", "y")

    state = engine.feed("2>>")
    assert state.lines == ("    x", "    y")
    assert state.logical_cursor == (0, 4)

    assert engine.feed("<<").lines == ("x", "    y")


def test_bold_toggles_on_word() -> None:
    engine = make_engine("hello world")

    state = engine.feed(["ctrl+b"])
    assert state.lines == ("**hello** world",)
    assert state.logical_cursor == (0, 2)

    assert engine.feed(["ctrl+b"]).lines == ("hello world",)
    assert engine.feed(["ctrl+i"]).lines == ("*hello* world",)


def test_markup_links_appends_references() -> None:
    engine = make_engine("see http://x.org now", "plain")

    state = engine.feed(["ctrl+h"])

    assert state.lines == (
        "see [http://x.org][1] now",
        "plain",
        "",
        "[1]: http://x.org",
    )
    assert state.status == "1 links marked"
    assert engine.feed(["ctrl+h"]).status == "No links found"


def test_markup_links_numbers_after_existing_references() -> None:
    engine = make_engine("see [http://a.org][1]", "go https://b.org", "", "[1]: http://a.org")

    state = engine.feed(["ctrl+h"])

    assert state.lines == (
        "see [http://a.org][1]",
        "go [https://b.org][2]",
        "",
        "[1]: http://a.org",
        "[2]: https://b.org",
    )


def test_smart_indent_toggle_updates_status() -> None:
    engine = make_engine("a")

    state = engine.feed(["ctrl+z"])

    assert state.status == "smart indent off"
    assert state.attributes["smart_indent"] == "off"
    assert engine.feed(["ctrl+z"]).status == "smart indent on"


def test_load_text_resets_session() -> None:
    engine = make_engine("old")
    engine.feed("i")

    state = engine.load_text(["new", "lines"], file_name="notes.md")

    assert state.mode == "normal"
    assert state.lines == ("new", "lines")
    assert state.attributes["file_name"] == "notes.md"
    assert state.dirty is False


def test_set_viewport_rewraps_cursor() -> None:
    engine = make_engine("abcdefgh")
    engine.feed("$")

    state = engine.set_viewport(3, 2)

    assert state.viewport == (3, 2)
    assert state.cursor == (1, 1)
    assert state.row_offset == 1
    assert state.logical_cursor == (0, 7)
