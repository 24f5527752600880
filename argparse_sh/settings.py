# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Settings`, the global options of one ArgParse-sh invocation, and
`HelpMode`, how help output is made available to the calling script.

Settings are built from the runtime options of the definition stream (or a config
file) and passed explicitly to the parser, help renderer and emitter, so several
parsers with different widths or prefixes can coexist in one process.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, auto

DEFAULT_COLUMNS = 80
DEFAULT_HELP_TRIGGER = "--help"


class HelpMode(Flag):
    """How help is offered to the calling script. Modes combine."""

    NONE = 0
    AUTO = auto()
    FUNCTION = auto()


@dataclass
class Settings:
    """
    Global options for one invocation.

    Attributes:
        prefix (str): Prepended to every emitted variable name.
        export (bool): Emit `export NAME=...` instead of plain assignments.
        debug (bool): Echo trace lines into the emitted script.
        program_name (str | None): Shown in the NAME help section.
        program_summary (str | None): One-line summary for the help header.
        program_description (str | None): Longer DESCRIPTION help section.
        columns (int): Width used to wrap help text.
        auto_help (bool): Render help when the help trigger is passed.
        help_function (str | None): Name of a shell function that prints help,
            defined after a successful parse.
        help_trigger (str): The user token that requests help.
    """

    prefix: str = ""
    export: bool = False
    debug: bool = False
    program_name: str | None = None
    program_summary: str | None = None
    program_description: str | None = None
    columns: int = DEFAULT_COLUMNS
    auto_help: bool = False
    help_function: str | None = None
    help_trigger: str = DEFAULT_HELP_TRIGGER

    @property
    def help_mode(self) -> HelpMode:
        """`AUTO` with auto help, `FUNCTION` with a help function, or both."""
        mode = HelpMode.NONE
        if self.auto_help:
            mode |= HelpMode.AUTO
        if self.help_function:
            mode |= HelpMode.FUNCTION
        return mode
