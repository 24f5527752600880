# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `ShellArgumentParser`, the entry point to ArgParse-sh's
argument resolution engine. It turns a declared set of typed arguments and the
user's command line into the variables a shell script should set.

Pipeline:
- `DefinitionSet`: declared arguments, sealed before parsing
- `TokenMatcher`: flag syntax, in input order
- `Resolver`: positional assignment, duplicates, defaults and required checks
- validator: per-type conversion of explicit values
- `HelpRenderer`: used instead of the above when help is requested

Public Interface:
- `add_definition(...)`: Declare a new argument (before the first parse).
- `parse_args(...)`: Resolve user tokens into a `ParseResult`, raising
  `HelpSignal` when help is requested.
- `run(...)`: Like `parse_args()`, but returns a `HelpResult` on help requests.
- `get_help_lines()` / `render_help()`: Plain help lines or Rich output.

Example Usage:
    parser = ShellArgumentParser(Settings(prefix="DEMO_", auto_help=True))
    parser.add_definition("string", "--given-name", ordinal=0, required=True)
    parser.add_definition("integer", "--age", "-a", default="0")

    result = parser.parse_args(["Alice", "-a", "32"])
    # result.as_dict("DEMO_") == {"DEMO_GIVEN_NAME": "Alice", "DEMO_AGE": "32"}

Errors are raised, never printed: `DefinitionError` for inconsistent definitions
and `UserError` for input that cannot satisfy them, always on the first problem.
"""
from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.markup import escape

from argparse_sh.console import console
from argparse_sh.logger import logger
from argparse_sh.parser.definition import Definition
from argparse_sh.parser.definition_set import DefinitionSet
from argparse_sh.parser.help_renderer import HelpDocument, HelpRenderer
from argparse_sh.parser.matcher import TokenMatcher
from argparse_sh.parser.parser_types import (
    HelpResult,
    ParseResult,
    ResolvedRecord,
    ResolvedValue,
)
from argparse_sh.parser.resolver import Resolver
from argparse_sh.parser.validator import format_value, validate_resolved
from argparse_sh.settings import Settings
from argparse_sh.signals import HelpSignal


class ShellArgumentParser:
    """
    Argument parser for shell scripts.

    Features:
    - String, integer, float, boolean and choice arguments.
    - `--flag value`, `--flag=value` and boolean negative flags.
    - Ordinal and catch-all positional assignment.
    - Repeated arguments, defaults, required arguments.
    - Choice aliases resolved with a single lookup.
    - Man-page style help with column-aware word wrap.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        definitions: DefinitionSet | None = None,
    ) -> None:
        self.settings: Settings = settings or Settings()
        self.definitions: DefinitionSet = (
            definitions if definitions is not None else DefinitionSet()
        )
        self.console: Console = console

    def add_definition(self, kind: Any, *flags: str, **kwargs: Any) -> Definition:
        """Declare a new argument. See `DefinitionSet.add_definition()`."""
        return self.definitions.add_definition(kind, *flags, **kwargs)

    def _build_records(self, resolved: dict[str, ResolvedValue]) -> list[ResolvedRecord]:
        records = []
        for resolved_value in resolved.values():
            definition = resolved_value.definition
            values = tuple(
                format_value(definition, value) for value in resolved_value.values
            )
            if definition.repeated:
                records.append(ResolvedRecord(definition.name, values, repeated=True))
            elif values:
                records.append(ResolvedRecord(definition.name, values[0]))
        return records

    def parse_args(self, args: Sequence[str] | None = None) -> ParseResult:
        """
        Resolve user tokens into records.

        Args:
            args (Sequence[str] | None): User tokens, after the `--` separator.

        Returns:
            ParseResult: One record per variable, in declaration order. Absent
                non-repeated arguments produce no record; absent repeated
                arguments produce a record with no values (count 0).

        Raises:
            DefinitionError: If definitions were added in an inconsistent state.
            UserError: If the tokens cannot satisfy the definitions.
            HelpSignal: If auto help is on and the help trigger was passed.
        """
        self.definitions.seal()
        tokens = list(args or [])
        logger.debug("Parsing argument values")

        match_result = TokenMatcher(self.definitions, self.settings).match(tokens)
        resolved = Resolver(self.definitions).resolve(match_result)
        validate_resolved(resolved)

        records = self._build_records(resolved)
        for record in records:
            for variable, value in record.assignments(self.settings.prefix):
                logger.debug('Setting %s = "%s"', variable, value)
        return ParseResult(tuple(records))

    def run(self, args: Sequence[str] | None = None) -> ParseResult | HelpResult:
        """Parse `args`, returning a `HelpResult` instead of raising `HelpSignal`."""
        try:
            return self.parse_args(args)
        except HelpSignal:
            return HelpResult(tuple(self.get_help_lines()))

    def get_help(self) -> HelpDocument:
        self.definitions.seal()
        return HelpRenderer(self.definitions, self.settings).render()

    def get_help_lines(self) -> list[str]:
        """Help text as plain lines, wrapped to `settings.columns`."""
        return self.get_help().to_lines()

    def render_help(self) -> None:
        """Print formatted help text using Rich output."""
        for section in self.get_help().sections:
            self.console.print(f"[bold]{escape(section.title)}[/bold]")
            for line in section.lines:
                self.console.print(escape(line), soft_wrap=True)

    def __str__(self) -> str:
        """Return a human-readable summary of the parser state."""
        return f"ShellArgumentParser({self.definitions}, prefix={self.settings.prefix!r})"

    def __repr__(self) -> str:
        return str(self)
