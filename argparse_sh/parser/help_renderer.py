# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders the help document of an ArgParse-sh invocation in a man-page like layout.

Sections:
- NAME (`program - summary`), or SUMMARY when only a summary is configured
- DESCRIPTION
- OPTIONS, one entry per non-secret definition: its flags, its description, the
  option list of choice arguments and a note about the default

All text is wrapped greedily at word boundaries to the configured column width. A
word longer than the width is kept whole on its own line.

The renderer returns a `HelpDocument` of plain lines rather than printing, so the
emitter can embed it in a shell script and `ShellArgumentParser.render_help()` can
print it with Rich.
"""
from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass, field
from typing import Callable

from argparse_sh.parser.argument_type import ArgumentType
from argparse_sh.parser.definition import Definition
from argparse_sh.parser.definition_set import DefinitionSet
from argparse_sh.settings import Settings

SHALLOW_INDENT = " " * 7
DEEP_INDENT = " " * 11
BULLET_INDENT = DEEP_INDENT + "•   "
BULLET_CONTINUATION = " " * 15

NO_DETAILS = "No details available."

_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n\s*")


def wrap_text(
    text: str,
    width: int,
    initial_indent: str = "",
    subsequent_indent: str = "",
) -> list[str]:
    """
    Greedily fill `text` into lines of at most `width` characters.

    Lines break only at whitespace; a single word wider than `width` is emitted
    unbroken on its own line.

    Example:
        wrap_text("This is a really neat program I wrote.", 25)
        → ["This is a really neat", "program I wrote."]
    """
    return textwrap.wrap(
        text,
        width=max(width, 1),
        initial_indent=initial_indent,
        subsequent_indent=subsequent_indent,
        break_long_words=False,
        break_on_hyphens=False,
    )


def cleanup_help_text(
    text: str,
    width: int,
    initial_indent: str = "",
    subsequent_indent: str = "",
) -> list[str]:
    """
    Reflow user supplied help text.

    Single newlines are treated as spaces, while one or more blank lines separate
    paragraphs, which stay separated by one empty line.
    """
    lines: list[str] = []
    for paragraph in _PARAGRAPH_BREAK.split(text.strip()):
        if lines:
            lines.append("")
        lines.extend(
            wrap_text(" ".join(paragraph.split()), width, initial_indent, subsequent_indent)
        )
    return lines


@dataclass
class HelpSection:
    """A titled block of help lines."""

    title: str
    lines: list[str] = field(default_factory=list)


@dataclass
class HelpDocument:
    """Ordered help sections."""

    sections: list[HelpSection] = field(default_factory=list)

    def to_lines(
        self,
        heading: Callable[[str], str] | None = None,
        transform: Callable[[str], str] | None = None,
    ) -> list[str]:
        """
        Flatten into lines, styling section titles with `heading` and body lines
        with `transform` if given.
        """
        lines: list[str] = []
        for section in self.sections:
            lines.append(heading(section.title) if heading else section.title)
            if transform:
                lines.extend(transform(line) for line in section.lines)
            else:
                lines.extend(section.lines)
        return lines


class HelpRenderer:
    """Builds a `HelpDocument` from a `DefinitionSet` and `Settings`."""

    def __init__(self, definitions: DefinitionSet, settings: Settings | None = None):
        self.definitions = definitions
        self.settings = settings or Settings()

    @property
    def columns(self) -> int:
        return self.settings.columns

    def _paragraphs(self, text: str, indent: str = SHALLOW_INDENT) -> list[str]:
        return cleanup_help_text(text, self.columns, indent, indent) + [""]

    def _bullet(self, text: str) -> list[str]:
        return cleanup_help_text(
            text, self.columns, BULLET_INDENT, BULLET_CONTINUATION
        ) + [""]

    def _header_sections(self) -> list[HelpSection]:
        sections = []
        name = self.settings.program_name
        summary = self.settings.program_summary
        if name and summary:
            sections.append(HelpSection("NAME", self._paragraphs(f"{name} - {summary}")))
        elif name:
            sections.append(HelpSection("NAME", self._paragraphs(name)))
        elif summary:
            sections.append(HelpSection("SUMMARY", self._paragraphs(summary)))

        if self.settings.program_description:
            sections.append(
                HelpSection(
                    "DESCRIPTION", self._paragraphs(self.settings.program_description)
                )
            )
        return sections

    def get_help_flags(self, definition: Definition) -> list[str]:
        """Flag forms shown on the first line of an option entry."""
        if definition.kind is ArgumentType.BOOLEAN:
            return [f"{flag}[=<true|false>]" for flag in definition.flags] + list(
                definition.negative_flags
            )
        placeholder = f"<{definition.name.lower()}>"
        if not definition.flags:
            return [f"{placeholder}..." if definition.repeated else placeholder]
        return [f"{flag} {placeholder}" for flag in definition.flags]

    def _flag_lines(self, definition: Definition) -> list[str]:
        lines = []
        line_so_far = ""
        for flag in self.get_help_flags(definition):
            if not line_so_far:
                line_so_far = f"{SHALLOW_INDENT}{flag}"
            elif len(line_so_far) + len(flag) + 4 > self.columns:
                lines.append(f"{line_so_far},")
                line_so_far = f"{SHALLOW_INDENT}{flag}"
            else:
                line_so_far += f", {flag}"
        lines.append(line_so_far)
        return lines

    def _choice_lines(self, definition: Definition) -> list[str]:
        lines = self._paragraphs("The possible options are:", DEEP_INDENT)
        for option in definition.options:
            lines.extend(self._bullet(f"{option.name} - {option.help or NO_DETAILS}"))
        for alias, target in definition.mappings.items():
            lines.extend(self._bullet(f"{alias} - identical to '{target}'"))
        return lines

    def get_help_default(self, definition: Definition) -> str | None:
        """The trailing note describing what happens when the option is omitted."""
        if definition.kind is ArgumentType.BOOLEAN:
            return (
                "When this option is not provided it will default to false. "
                "If provided without a value it will be set to true."
            )
        if definition.default is not None:
            return (
                "When this option is not provided it will default to "
                f"'{definition.default}'."
            )
        return None

    def _option_lines(self, definition: Definition) -> list[str]:
        lines = self._flag_lines(definition)
        lines.extend(self._paragraphs(definition.description or NO_DETAILS, DEEP_INDENT))
        if definition.kind is ArgumentType.CHOICE:
            lines.extend(self._choice_lines(definition))
        default_note = self.get_help_default(definition)
        if default_note:
            lines.extend(self._paragraphs(default_note, DEEP_INDENT))
        return lines

    def render(self) -> HelpDocument:
        """Build the full help document."""
        document = HelpDocument(self._header_sections())
        visible = [definition for definition in self.definitions if not definition.secret]
        if visible:
            options = HelpSection("OPTIONS")
            for definition in visible:
                options.lines.extend(self._option_lines(definition))
            document.sections.append(options)
        return document

    def render_lines(self) -> list[str]:
        return self.render().to_lines()
