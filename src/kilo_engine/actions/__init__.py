"""High-level editing verbs reused across modes."""

from . import command, core, edit, insert, visual
from .command import submit_command_line
from .core import enter_insert, exit_to_normal_mode
from .insert import insert_text

__all__ = [
    "command",
    "core",
    "edit",
    "insert",
    "visual",
    "enter_insert",
    "exit_to_normal_mode",
    "insert_text",
    "submit_command_line",
]
