"""Motion engine: pure queries over logical (line, column) positions."""

from .lines import (
    document_end,
    first_non_blank,
    goto_line,
    indent_amount,
    line_end,
    line_start,
    vertical,
)
from .search import find_next
from .words import (
    current_word_end,
    is_word_char,
    next_word_end,
    next_word_start,
    previous_word_start,
    word_bounds,
    word_under_cursor,
)

__all__ = [
    "current_word_end",
    "document_end",
    "find_next",
    "first_non_blank",
    "goto_line",
    "indent_amount",
    "is_word_char",
    "line_end",
    "line_start",
    "next_word_end",
    "next_word_start",
    "previous_word_start",
    "vertical",
    "word_bounds",
    "word_under_cursor",
]
