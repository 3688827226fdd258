from __future__ import annotations

from typing import Any, List, Tuple

from kilo_engine import Engine, EngineConfig


def make_engine(*lines: str, **kwargs: object) -> Engine:
    return Engine(lines, **kwargs)  # type: ignore[arg-type]


def record_events(engine: Engine, *names: str) -> List[Tuple[str, Any]]:
    events: List[Tuple[str, Any]] = []
    for name in names:
        engine.bus.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )
    return events


def test_undo_reverts_last_insert_keystroke() -> None:
    engine = make_engine("hello")

    engine.feed(["i", "x", "y", "ESC"])
    assert engine.serialize_text() == ("xyhello",)

    assert engine.feed("u").lines == ("xhello",)
    assert engine.feed("u").lines == ("xhello",)


def test_undo_after_enter_and_backspace() -> None:
    engine = make_engine("abcd")
    engine.feed(["l", "l", "i", "ENTER", "ESC"])
    assert engine.serialize_text() == ("ab", "cd")
    assert engine.feed("u").lines == ("abcd",)

    engine = make_engine("abc")
    engine.feed(["A", "BACKSPACE", "BACKSPACE", "ESC"])
    assert engine.serialize_text() == ("a",)
    assert engine.feed("u").lines == ("ab",)


def test_escape_steps_cursor_left() -> None:
    engine = make_engine("abc")
    assert engine.feed("A").logical_cursor == (0, 3)
    assert engine.mode == "insert"
    assert engine.render().status == "-- INSERT --"

    state = engine.feed(["ESC"])

    assert state.mode == "normal"
    assert state.logical_cursor == (0, 2)
    assert state.status == ""


def test_smart_indent_enter_copies_indentation() -> None:
    engine = make_engine("    foo")

    state = engine.feed(["A", "ENTER", "b"])

    assert state.lines == ("    foo", "    b")
    assert state.logical_cursor == (1, 5)


def test_enter_without_smart_indent() -> None:
    engine = make_engine("    foo")
    engine.feed(["ctrl+z"])

    state = engine.feed(["A", "ENTER", "b"])

    assert state.lines == ("    foo", "b")


def test_smart_indent_disabled_by_config() -> None:
    engine = make_engine("  foo", config=EngineConfig(smart_indent=False))

    assert engine.feed(["A", "ENTER"]).lines == ("  foo", "")


def test_enter_splits_line_at_cursor() -> None:
    engine = make_engine("abcd")

    state = engine.feed(["l", "l", "i", "ENTER"])

    assert state.lines == ("ab", "cd")
    assert state.logical_cursor == (1, 0)


def test_backspace_joins_lines() -> None:
    engine = make_engine("ab", "cd")

    state = engine.feed(["j", "i", "BACKSPACE"])

    assert state.lines == ("abcd",)
    assert state.logical_cursor == (0, 2)

    assert engine.feed(["BACKSPACE"]).lines == ("acd",)


def test_delete_forward_in_insert_mode() -> None:
    engine = make_engine("abc")

    assert engine.feed(["i", "DELETE"]).lines == ("bc",)
    assert engine.feed(["END", "DELETE"]).lines == ("bc",)


def test_typing_into_empty_document_creates_line() -> None:
    engine = make_engine()

    assert engine.feed(["i", "a"]).lines == ("a",)
    assert engine.feed(["ESC", "u"]).status == "Already at oldest change"


def test_enter_in_empty_document() -> None:
    engine = make_engine()

    state = engine.feed(["i", "ENTER"])

    assert state.lines == ("", "")
    assert state.logical_cursor == (1, 0)


def test_open_line_below_and_above() -> None:
    engine = make_engine("  x")

    state = engine.feed(["o", "y", "ESC"])
    assert state.lines == ("  x", "  y")
    assert state.mode == "normal"

    state = engine.feed(["g", "g", "O", "ESC"])
    assert state.lines == ("", "  x", "  y")
    assert state.logical_cursor == (0, 0)


def test_substitute_and_change_word_undo_one_step() -> None:
    engine = make_engine("abc")
    engine.feed(["s", "ESC"])
    assert engine.serialize_text() == ("bc",)
    assert engine.feed("u").lines == ("abc",)

    engine = make_engine("hello world")
    engine.feed(["c", "w", "b", "y", "e", "ESC"])
    assert engine.serialize_text() == ("bye world",)
    assert engine.feed("u").lines == ("by world",)


def test_typing_to_full_row_moves_cursor_to_next_visual_row() -> None:
    engine = make_engine("ab", "xy")
    engine.set_viewport(3, 5)

    state = engine.feed(["A", "c"])
    assert state.lines == ("abc", "xy")
    assert state.cursor == (1, 0)
    assert state.logical_cursor == (0, 3)

    state = engine.feed(["d"])
    assert state.lines == ("abcd", "xy")
    assert state.cursor == (1, 1)
    assert state.logical_cursor == (0, 4)


def test_backspace_from_continuation_row() -> None:
    engine = make_engine("ab", "xy")
    engine.set_viewport(3, 5)
    engine.feed(["A", "c"])

    state = engine.feed(["BACKSPACE"])

    assert state.lines == ("ab", "xy")
    assert state.cursor == (0, 2)
    assert state.logical_cursor == (0, 2)


def test_escape_from_continuation_row() -> None:
    engine = make_engine("ab", "xy")
    engine.set_viewport(3, 5)
    engine.feed(["A", "c"])

    state = engine.feed(["ESC"])

    assert state.mode == "normal"
    assert state.lines == ("abc", "xy")
    assert state.cursor == (0, 2)
    assert state.logical_cursor == (0, 2)


def test_command_line_is_rendered() -> None:
    engine = make_engine("a")
    events = record_events(engine, "command.start")

    assert engine.feed(":").command_line == ":"
    assert engine.mode == "command"
    assert events == [("command.start", None)]

    state = engine.feed("wq")
    assert state.command_line == ":wq"
    assert state.status == ":wq"


def test_quit_clean_buffer() -> None:
    engine = make_engine("a")
    events = record_events(engine, "command.quit")

    state = engine.feed([":", "q", "ENTER"])

    assert state.quit_requested is True
    assert state.mode == "normal"
    assert events == [("command.quit", {"force": False})]


def test_quit_refused_when_dirty_then_forced() -> None:
    engine = make_engine("ab")
    engine.feed("x")

    state = engine.feed([":", "q", "ENTER"])

    assert state.quit_requested is False
    assert state.status == "No write since last change"
    assert engine.last_result is not None
    assert engine.last_result.status == "command_quit_refused"

    state = engine.feed([":", "q", "!", "ENTER"])
    assert state.quit_requested is True


def test_quit_refused_message_is_configurable() -> None:
    config = EngineConfig(quit_refused_message="E37: No write since last change")
    engine = make_engine("ab", config=config)
    engine.feed("x")

    assert engine.feed([":", "q", "ENTER"]).status == "E37: No write since last change"


def test_write_without_file_name() -> None:
    engine = make_engine("a")
    events = record_events(engine, "command.write")

    state = engine.feed([":", "w", "ENTER"])

    assert state.status == "No file name"
    assert events == []


def test_write_publishes_lines_and_marks_clean() -> None:
    engine = make_engine("ab")
    engine.feed("x")
    events = record_events(engine, "command.submit", "command.write")

    state = engine.feed([":", *"w out.txt", "ENTER"])

    assert events == [
        ("command.submit", "w out.txt"),
        ("command.write", {"file_name": "out.txt", "lines": ("b",)}),
    ]
    assert state.status == '"out.txt" 1L written'
    assert state.dirty is False
    assert state.attributes["file_name"] == "out.txt"


def test_write_failure_is_reported() -> None:
    engine = make_engine("ab", file_name="locked.txt")
    engine.feed("x")

    def refuse(payload: object) -> None:
        raise OSError("disk full")

    engine.bus.subscribe("command.write", refuse)

    state = engine.feed([":", "w", "ENTER"])

    assert state.status == 'Can\'t write "locked.txt": disk full'
    assert state.dirty is True
    assert state.quit_requested is False


def test_write_quit_uses_known_file_name() -> None:
    engine = make_engine("a", file_name="notes.md")
    events = record_events(engine, "command.write", "command.quit")

    state = engine.feed([":", "w", "q", "ENTER"])

    assert state.quit_requested is True
    assert [name for name, _ in events] == ["command.write", "command.quit"]
    assert state.status == '"notes.md" 1L written'


def test_unknown_command_is_reported() -> None:
    engine = make_engine("a")
    events = record_events(engine, "command.error")

    state = engine.feed([":", "f", "o", "o", "ENTER"])

    assert state.status == "Not an editor command: foo"
    assert state.mode == "normal"
    assert events == [("command.error", "foo")]


def test_command_backspace_and_cancel() -> None:
    engine = make_engine("a")
    engine.feed([":", "a", "b"])

    assert engine.feed(["BACKSPACE"]).command_line == ":a"
    state = engine.feed(["BACKSPACE", "BACKSPACE"])
    assert state.mode == "normal"
    assert state.command_line == ""

    engine.feed([":", "x"])
    state = engine.feed(["ESC"])
    assert state.mode == "normal"
    assert state.status == ""
    assert state.quit_requested is False


def test_empty_command_returns_to_normal() -> None:
    engine = make_engine("a")

    state = engine.feed([":", "ENTER"])

    assert state.mode == "normal"
    assert engine.last_result is not None
    assert engine.last_result.status == "command_empty"


def test_ctrl_s_writes_without_leaving_insert() -> None:
    engine = make_engine("abc", file_name="notes.md")
    events = record_events(engine, "command.write")

    state = engine.feed(["i", "x", "ctrl+s"])

    assert state.mode == "insert"
    assert state.dirty is False
    assert state.status == '"notes.md" 1L written'
    assert events == [
        ("command.write", {"file_name": "notes.md", "lines": ("xabc",)})
    ]


def test_ctrl_s_without_file_name_reports_error() -> None:
    engine = make_engine("abc")

    state = engine.feed(["i", "x", "ctrl+s"])

    assert state.mode == "insert"
    assert state.dirty is True
    assert state.status == "No file name"


def test_ctrl_q_warns_on_unsaved_changes_then_quits() -> None:
    engine = make_engine("abc")
    events = record_events(engine, "command.quit")

    state = engine.feed(["i", "x", "ctrl+q"])

    assert state.quit_requested is False
    assert state.status == (
        "WARNING!!! File has unsaved changes. Press Ctrl-Q 1 more times to quit."
    )
    assert events == []

    state = engine.feed(["ctrl+q"])

    assert state.quit_requested is True
    assert events == [("command.quit", {"force": True})]


def test_ctrl_q_on_clean_buffer_quits_at_once() -> None:
    engine = make_engine("abc")

    assert engine.feed(["i", "ctrl+q"]).quit_requested is True


def test_other_keys_reset_quit_warning() -> None:
    engine = make_engine("abc")

    state = engine.feed(["i", "x", "ctrl+q", "y", "ctrl+q"])

    assert state.lines == ("xyabc",)
    assert state.quit_requested is False
    assert state.status.startswith("WARNING!!!")
    assert engine.feed(["ctrl+q"]).quit_requested is True


def test_quit_times_is_configurable() -> None:
    engine = make_engine("abc", config=EngineConfig(quit_times=2))

    state = engine.feed(["i", "x", "ctrl+q"])
    assert state.status.endswith("Press Ctrl-Q 2 more times to quit.")

    state = engine.feed(["ctrl+q"])
    assert state.status.endswith("Press Ctrl-Q 1 more times to quit.")
    assert state.quit_requested is False

    assert engine.feed(["ctrl+q"]).quit_requested is True
