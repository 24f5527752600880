# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Writes the shell statements that the calling script evaluates with
`eval "$(argparse-sh ... -- "$@")"`.

Output forms:
- Assignments: `NAME="value"`, `export NAME="value"` with `--export`, with the
  configured prefix on every name. Repeated arguments set the count on the base
  name and each value on `NAME_<index>`.
- Errors: an `echo` banner followed by `( exit CODE )` so `set -e` scripts stop.
- Help: a subshell that pages the help text through `$PAGER` (default `less -R`),
  optionally wrapped in a named shell function.
- Debug: `echo "[ArgParse] ..."` lines, fed by `ShellEchoHandler` from the
  `argparse_sh` logger.
"""
from __future__ import annotations

import logging
import sys
from typing import Iterable, TextIO

from argparse_sh.exceptions import HELP_EXIT_CODE, ArgParseError
from argparse_sh.parser.help_renderer import HelpDocument
from argparse_sh.parser.parser_types import ResolvedRecord
from argparse_sh.settings import Settings

DEBUG_PREFIX = "[ArgParse]"

_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "$": "\\$", "`": "\\`"})


def escape(text: str) -> str:
    """Escape text for use inside a double-quoted shell string."""
    return text.translate(_ESCAPES)


def quote(text: str) -> str:
    """Return `text` as a double-quoted shell string."""
    return f'"{escape(text)}"'


class ShellEmitter:
    """Renders results as shell statements on a text stream."""

    def __init__(self, settings: Settings, stream: TextIO | None = None):
        self.settings = settings
        self.stream = stream or sys.stdout

    def _write(self, line: str = "") -> None:
        self.stream.write(f"{line}\n")

    def echo(self, text: str) -> None:
        self._write(f"echo {quote(text)}")

    def assignment(self, variable: str, value: str) -> str:
        export = "export " if self.settings.export else ""
        return f"{export}{variable}={quote(value)}"

    def emit_records(self, records: Iterable[ResolvedRecord]) -> None:
        for record in records:
            for variable, value in record.assignments(self.settings.prefix):
                self._write(self.assignment(variable, value))

    def emit_error(self, error: ArgParseError) -> None:
        self.echo("")
        self.echo(f"!!! ArgParse-sh Error: {error.message} !!!")
        self.echo("")
        self._write(f"( exit {error.exit_code} )")

    def _help_script(self, lines: Iterable[str]) -> list[str]:
        script = [
            "(",
            "if [ -t 1 ]; then",
            '  bold="$(tput bold)"',
            '  unbold="$(tput sgr0)"',
            "else",
            '  bold=""',
            '  unbold=""',
            "fi",
            'HELP_PAGER="${PAGER:-"less -R"}"',
            'HELP_TEXT="',
        ]
        script.extend(lines)
        script.extend(['"', 'echo "$HELP_TEXT" | $HELP_PAGER', ")"])
        return script

    def help_text(self, document: HelpDocument) -> list[str]:
        """Escape help lines, wrapping section titles in the bold markers."""
        return document.to_lines(
            heading=lambda title: f"${{bold}}{escape(title)}${{unbold}}",
            transform=escape,
        )

    def emit_help(self, document: HelpDocument) -> None:
        """Write the help script, then exit the `eval` with the help status."""
        for line in self._help_script(self.help_text(document)):
            self._write(line)
        self._write(f"( exit {HELP_EXIT_CODE} )")

    def emit_help_function(self, name: str, document: HelpDocument) -> None:
        """Define shell function `name` that prints the help text."""
        self._write(f"{name} () {{")
        for line in self._help_script(self.help_text(document)):
            self._write(line)
        self._write("}")


class ShellEchoHandler(logging.Handler):
    """
    Logging handler that turns records into `echo` statements in the emitted
    script, so `--debug` traces show up when the calling script runs.
    """

    def __init__(self, emitter: ShellEmitter, level: int = logging.DEBUG):
        super().__init__(level)
        self.emitter = emitter
        self.setFormatter(logging.Formatter(f"{DEBUG_PREFIX} %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.emitter.echo(self.format(record))
        except Exception:
            self.handleError(record)
