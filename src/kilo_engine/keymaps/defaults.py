"""Built-in keymaps that seed each mode with the editor's commands."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from kilo_engine.actions import command as command_actions
from kilo_engine.actions import core as core_actions
from kilo_engine.actions import edit as edit_actions
from kilo_engine.actions import insert as insert_actions
from kilo_engine.actions import visual as visual_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    # Motions shared by normal and insert mode.
    ActionRef(id="core.move_left", handler=core_actions.move_left, description="Cursor left"),
    ActionRef(id="core.move_right", handler=core_actions.move_right, description="Cursor right"),
    ActionRef(id="core.move_up", handler=core_actions.move_up, description="Cursor up one line"),
    ActionRef(id="core.move_down", handler=core_actions.move_down, description="Cursor down one line"),
    ActionRef(id="core.page_up", handler=core_actions.page_up, description="Cursor up one screen"),
    ActionRef(id="core.page_down", handler=core_actions.page_down, description="Cursor down one screen"),
    ActionRef(id="core.word_forward", handler=core_actions.word_forward, description="Start of next word"),
    ActionRef(id="core.word_backward", handler=core_actions.word_backward, description="Start of previous word"),
    ActionRef(id="core.word_end", handler=core_actions.word_end, description="End of word"),
    ActionRef(id="core.line_start", handler=core_actions.line_start, description="Start of line"),
    ActionRef(id="core.line_end", handler=core_actions.line_end, description="End of line"),
    ActionRef(id="core.document_end", handler=core_actions.document_end, description="Last line, or line N"),
    ActionRef(id="core.goto_line", handler=core_actions.goto_line, description="First line, or line N"),
    ActionRef(id="core.search_word", handler=core_actions.search_word, description="Search word under cursor"),
    ActionRef(id="core.search_next", handler=core_actions.search_next, description="Repeat last search"),
    # Mode entry.
    ActionRef(id="core.insert_before", handler=core_actions.insert_before, description="Insert before cursor"),
    ActionRef(id="core.append_after", handler=core_actions.append_after, description="Append after cursor"),
    ActionRef(id="core.append_line_end", handler=core_actions.append_line_end, description="Append at line end"),
    ActionRef(
        id="core.insert_line_start",
        handler=core_actions.insert_line_start,
        description="Insert before first non-blank",
    ),
    ActionRef(id="core.enter_command", handler=core_actions.enter_command_mode, description="Enter command-line mode"),
    ActionRef(id="core.enter_visual_line", handler=core_actions.enter_visual_line, description="Enter visual line mode"),
    ActionRef(id="core.enter_visual_char", handler=core_actions.enter_visual_char, description="Enter visual mode"),
    ActionRef(id="core.enter_replace_char", handler=core_actions.enter_replace_char, description="Replace characters"),
    ActionRef(id="core.clear_pending", handler=core_actions.clear_pending, description="Discard pending keys"),
    ActionRef(id="core.exit_to_normal", handler=core_actions.exit_to_normal_mode, description="Return to normal mode"),
    ActionRef(
        id="core.toggle_smart_indent",
        handler=core_actions.toggle_smart_indent,
        description="Toggle smart indent",
    ),
    # Normal-mode edits.
    ActionRef(id="edit.delete_chars", handler=edit_actions.delete_chars, description="Delete characters", mutates=True),
    ActionRef(id="edit.substitute", handler=edit_actions.substitute, description="Substitute characters", mutates=True),
    ActionRef(id="edit.toggle_case", handler=edit_actions.toggle_case, description="Toggle case", mutates=True),
    ActionRef(id="edit.paste", handler=edit_actions.paste, description="Paste register", mutates=True),
    ActionRef(id="edit.undo", handler=edit_actions.undo, description="Undo last change", mutates=True),
    ActionRef(id="edit.delete_lines", handler=edit_actions.delete_lines, description="Cut lines", mutates=True),
    ActionRef(id="edit.yank_lines", handler=edit_actions.yank_lines, description="Yank lines"),
    ActionRef(id="edit.delete_word", handler=edit_actions.delete_word, description="Delete word", mutates=True),
    ActionRef(
        id="edit.delete_to_word_end",
        handler=edit_actions.delete_to_word_end,
        description="Delete to end of word",
        mutates=True,
    ),
    ActionRef(
        id="edit.delete_to_line_end",
        handler=edit_actions.delete_to_line_end,
        description="Delete to end of line",
        mutates=True,
    ),
    ActionRef(id="edit.change_word", handler=edit_actions.change_word, description="Change word", mutates=True),
    ActionRef(id="edit.delete_a_word", handler=edit_actions.delete_a_word, description="Delete a word", mutates=True),
    ActionRef(id="edit.change_a_word", handler=edit_actions.change_a_word, description="Change a word", mutates=True),
    ActionRef(id="edit.indent_lines", handler=edit_actions.indent_lines, description="Indent lines", mutates=True),
    ActionRef(id="edit.unindent_lines", handler=edit_actions.unindent_lines, description="Unindent lines", mutates=True),
    ActionRef(
        id="edit.bold",
        handler=edit_actions.decorate_word,
        description="Toggle bold markers",
        mutates=True,
        metadata={"style": "bold"},
    ),
    ActionRef(
        id="edit.italic",
        handler=edit_actions.decorate_word,
        description="Toggle italic markers",
        mutates=True,
        metadata={"style": "italic"},
    ),
    ActionRef(
        id="edit.code",
        handler=edit_actions.decorate_word,
        description="Toggle code markers",
        mutates=True,
        metadata={"style": "code"},
    ),
    ActionRef(
        id="edit.markup_links",
        handler=edit_actions.markup_links,
        description="Turn bare URLs into reference links",
        mutates=True,
    ),
    # Insert mode.
    ActionRef(id="insert.newline", handler=insert_actions.insert_newline, description="Split line", mutates=True),
    ActionRef(id="insert.backspace", handler=insert_actions.backspace, description="Delete left", mutates=True),
    ActionRef(id="insert.delete_forward", handler=insert_actions.delete_forward, description="Delete right", mutates=True),
    ActionRef(id="insert.leave", handler=insert_actions.leave_insert, description="Leave insert mode"),
    ActionRef(id="insert.open_below", handler=insert_actions.open_line_below, description="Open line below", mutates=True),
    ActionRef(id="insert.open_above", handler=insert_actions.open_line_above, description="Open line above", mutates=True),
    ActionRef(id="insert.save", handler=command_actions.save_buffer, description="Write the file"),
    ActionRef(id="insert.quit", handler=command_actions.quit_editor, description="Quit, confirming unsaved changes"),
    # Visual line mode.
    ActionRef(id="visual.extend_line_down", handler=visual_actions.extend_line_down, description="Extend highlight down"),
    ActionRef(id="visual.extend_line_up", handler=visual_actions.extend_line_up, description="Extend highlight up"),
    ActionRef(id="visual.line_left", handler=visual_actions.move_within_line_left, description="Cursor left"),
    ActionRef(id="visual.line_right", handler=visual_actions.move_within_line_right, description="Cursor right"),
    ActionRef(id="visual.cut_lines", handler=visual_actions.cut_lines, description="Cut highlighted lines", mutates=True),
    ActionRef(id="visual.yank_lines", handler=visual_actions.yank_lines, description="Yank highlighted lines"),
    ActionRef(id="visual.indent", handler=visual_actions.indent_selection, description="Indent lines", mutates=True),
    ActionRef(id="visual.unindent", handler=visual_actions.unindent_selection, description="Unindent lines", mutates=True),
    # Visual char mode.
    ActionRef(id="visual.extend_char_left", handler=visual_actions.extend_char_left, description="Extend highlight left"),
    ActionRef(id="visual.extend_char_right", handler=visual_actions.extend_char_right, description="Extend highlight right"),
    ActionRef(id="visual.extend_word_forward", handler=visual_actions.extend_word_forward, description="Extend to next word"),
    ActionRef(
        id="visual.extend_word_backward",
        handler=visual_actions.extend_word_backward,
        description="Extend to previous word",
    ),
    ActionRef(id="visual.extend_word_end", handler=visual_actions.extend_word_end, description="Extend to word end"),
    ActionRef(id="visual.extend_line_start", handler=visual_actions.extend_line_start, description="Extend to line start"),
    ActionRef(id="visual.extend_line_end", handler=visual_actions.extend_line_end, description="Extend to line end"),
    ActionRef(id="visual.cut_span", handler=visual_actions.cut_span, description="Cut highlighted text", mutates=True),
    ActionRef(id="visual.yank_span", handler=visual_actions.yank_span, description="Yank highlighted text"),
    ActionRef(
        id="visual.bold",
        handler=visual_actions.decorate_span,
        description="Wrap highlight in bold markers",
        mutates=True,
        metadata={"style": "bold"},
    ),
    ActionRef(
        id="visual.italic",
        handler=visual_actions.decorate_span,
        description="Wrap highlight in italic markers",
        mutates=True,
        metadata={"style": "italic"},
    ),
    ActionRef(
        id="visual.code",
        handler=visual_actions.decorate_span,
        description="Wrap highlight in code markers",
        mutates=True,
        metadata={"style": "code"},
    ),
    # Command line.
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the active command line",
    ),
    ActionRef(id="command.cancel", handler=command_actions.cancel_command_line, description="Cancel command line"),
    ActionRef(id="command.backspace", handler=command_actions.erase_command_char, description="Erase last character"),
)


_MOTION_KEYS: tuple[tuple[str, Sequence[str], str], ...] = (
    ("left", ("LEFT",), "core.move_left"),
    ("right", ("RIGHT",), "core.move_right"),
    ("up", ("UP",), "core.move_up"),
    ("down", ("DOWN",), "core.move_down"),
    ("page_up", ("PAGE_UP",), "core.page_up"),
    ("page_down", ("PAGE_DOWN",), "core.page_down"),
    ("bold", ("ctrl+b",), "edit.bold"),
    ("italic", ("ctrl+i",), "edit.italic"),
    ("code", ("ctrl+e",), "edit.code"),
)

_NORMAL_KEYS: tuple[tuple[str, Sequence[str], str], ...] = _MOTION_KEYS + (
    ("h", ("h",), "core.move_left"),
    ("l", ("l",), "core.move_right"),
    ("k", ("k",), "core.move_up"),
    ("j", ("j",), "core.move_down"),
    ("w", ("w",), "core.word_forward"),
    ("b", ("b",), "core.word_backward"),
    ("e", ("e",), "core.word_end"),
    ("zero", ("0",), "core.line_start"),
    ("home", ("HOME",), "core.line_start"),
    ("dollar", ("$",), "core.line_end"),
    ("end", ("END",), "core.line_end"),
    ("G", ("G",), "core.document_end"),
    ("gg", ("g", "g"), "core.goto_line"),
    ("star", ("*",), "core.search_word"),
    ("n", ("n",), "core.search_next"),
    ("i", ("i",), "core.insert_before"),
    ("a", ("a",), "core.append_after"),
    ("A", ("A",), "core.append_line_end"),
    ("I", ("I",), "core.insert_line_start"),
    ("o", ("o",), "insert.open_below"),
    ("O", ("O",), "insert.open_above"),
    ("colon", (":",), "core.enter_command"),
    ("V", ("V",), "core.enter_visual_line"),
    ("v", ("v",), "core.enter_visual_char"),
    ("r", ("r",), "core.enter_replace_char"),
    ("escape", ("ESC",), "core.clear_pending"),
    ("smart_indent", ("ctrl+z",), "core.toggle_smart_indent"),
    ("x", ("x",), "edit.delete_chars"),
    ("s", ("s",), "edit.substitute"),
    ("tilde", ("~",), "edit.toggle_case"),
    ("p", ("p",), "edit.paste"),
    ("u", ("u",), "edit.undo"),
    ("dd", ("d", "d"), "edit.delete_lines"),
    ("dw", ("d", "w"), "edit.delete_word"),
    ("de", ("d", "e"), "edit.delete_to_word_end"),
    ("d_dollar", ("d", "$"), "edit.delete_to_line_end"),
    ("daw", ("d", "a", "w"), "edit.delete_a_word"),
    ("cw", ("c", "w"), "edit.change_word"),
    ("caw", ("c", "a", "w"), "edit.change_a_word"),
    ("indent", (">", ">"), "edit.indent_lines"),
    ("unindent", ("<", "<"), "edit.unindent_lines"),
    ("yy", ("y", "y"), "edit.yank_lines"),
    ("links", ("ctrl+h",), "edit.markup_links"),
)

_INSERT_KEYS: tuple[tuple[str, Sequence[str], str], ...] = _MOTION_KEYS + (
    ("home", ("HOME",), "core.line_start"),
    ("end", ("END",), "core.line_end"),
    ("enter", ("ENTER",), "insert.newline"),
    ("backspace", ("BACKSPACE",), "insert.backspace"),
    ("delete", ("DELETE",), "insert.delete_forward"),
    ("escape", ("ESC",), "insert.leave"),
    ("save", ("ctrl+s",), "insert.save"),
    ("quit", ("ctrl+q",), "insert.quit"),
)

_COMMAND_KEYS: tuple[tuple[str, Sequence[str], str], ...] = (
    ("enter", ("ENTER",), "command.submit_line"),
    ("escape", ("ESC",), "command.cancel"),
    ("backspace", ("BACKSPACE",), "command.backspace"),
)

_VISUAL_LINE_KEYS: tuple[tuple[str, Sequence[str], str], ...] = (
    ("j", ("j",), "visual.extend_line_down"),
    ("down", ("DOWN",), "visual.extend_line_down"),
    ("k", ("k",), "visual.extend_line_up"),
    ("up", ("UP",), "visual.extend_line_up"),
    ("h", ("h",), "visual.line_left"),
    ("left", ("LEFT",), "visual.line_left"),
    ("l", ("l",), "visual.line_right"),
    ("right", ("RIGHT",), "visual.line_right"),
    ("x", ("x",), "visual.cut_lines"),
    ("d", ("d",), "visual.cut_lines"),
    ("y", ("y",), "visual.yank_lines"),
    ("indent", (">",), "visual.indent"),
    ("unindent", ("<",), "visual.unindent"),
    ("escape", ("ESC",), "core.exit_to_normal"),
)

_VISUAL_CHAR_KEYS: tuple[tuple[str, Sequence[str], str], ...] = (
    ("h", ("h",), "visual.extend_char_left"),
    ("left", ("LEFT",), "visual.extend_char_left"),
    ("l", ("l",), "visual.extend_char_right"),
    ("right", ("RIGHT",), "visual.extend_char_right"),
    ("w", ("w",), "visual.extend_word_forward"),
    ("b", ("b",), "visual.extend_word_backward"),
    ("e", ("e",), "visual.extend_word_end"),
    ("zero", ("0",), "visual.extend_line_start"),
    ("dollar", ("$",), "visual.extend_line_end"),
    ("x", ("x",), "visual.cut_span"),
    ("d", ("d",), "visual.cut_span"),
    ("y", ("y",), "visual.yank_span"),
    ("bold", ("ctrl+b",), "visual.bold"),
    ("italic", ("ctrl+i",), "visual.italic"),
    ("code", ("ctrl+e",), "visual.code"),
    ("escape", ("ESC",), "core.exit_to_normal"),
)

_REPLACE_KEYS: tuple[tuple[str, Sequence[str], str], ...] = (
    ("escape", ("ESC",), "core.exit_to_normal"),
)


def _bindings(
    mode: str, rows: Iterable[tuple[str, Sequence[str], str]]
) -> tuple[Binding, ...]:
    return tuple(
        Binding(
            id=f"{mode}.{name}",
            mode=mode,
            sequence=KeySequence.from_strings(*keys),
            action_id=action_id,
        )
        for name, keys, action_id in rows
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bindings("normal", _NORMAL_KEYS)
    + _bindings("insert", _INSERT_KEYS)
    + _bindings("command", _COMMAND_KEYS)
    + _bindings("visual_line", _VISUAL_LINE_KEYS)
    + _bindings("visual_char", _VISUAL_CHAR_KEYS)
    + _bindings("replace_char", _REPLACE_KEYS)
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode.

    Bindings whose action was filtered out are skipped as well.
    """

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    registered: set[str] = set()
    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)
        registered.add(action.id)

    for binding in DEFAULT_BINDINGS:
        if binding.action_id not in registered:
            continue
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True
