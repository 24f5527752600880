# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `TokenMatcher`, the first pass over the user's arguments.

The matcher walks the tokens once, left to right, and recognises flag syntax:

- `--flag value`: the next token is the value, whatever it looks like
- `--flag=value`: split at the first `=`
- boolean `--flag` → `"true"`, `--flag=true|false`, negative `--no-flag` → `"false"`

Everything that is not a declared flag is kept, in order, as a residual token for
the resolver's positional assignment. When auto help is enabled, an unmatched
token equal to the help trigger stops processing by raising `HelpSignal`.
"""
from __future__ import annotations

from typing import Sequence

from argparse_sh.exceptions import UserError
from argparse_sh.logger import logger
from argparse_sh.parser.argument_type import ArgumentType
from argparse_sh.parser.definition import Definition
from argparse_sh.parser.definition_set import DefinitionSet
from argparse_sh.parser.parser_types import Match, MatchResult
from argparse_sh.settings import HelpMode, Settings
from argparse_sh.signals import HelpSignal

BOOLEAN_LITERALS = ("true", "false")


class TokenMatcher:
    """Matches raw user tokens against the flags of a `DefinitionSet`."""

    def __init__(self, definitions: DefinitionSet, settings: Settings | None = None):
        self.definitions = definitions
        self.settings = settings or Settings()

    def _split_token(self, token: str) -> tuple[Definition | None, str, str | None]:
        """Return the owning definition, the flag and the inline value of a token."""
        definition = self.definitions.find_flag(token)
        if definition:
            return definition, token, None
        if "=" in token:
            flag, value = token.split("=", 1)
            definition = self.definitions.find_flag(flag)
            if definition:
                return definition, flag, value
        return None, token, None

    def _boolean_value(self, definition: Definition, flag: str, value: str | None) -> str:
        if flag in definition.negative_flags:
            if value is not None:
                raise UserError(
                    f"Negative flag '{flag}' for argument {definition.name} "
                    f"does not take a value (got '{value}')"
                )
            return "false"
        if value is None:
            return "true"
        if value not in BOOLEAN_LITERALS:
            raise UserError(
                f"Non-boolean value '{value}' provided for argument {definition.name}"
            )
        return value

    def _is_help_trigger(self, token: str) -> bool:
        return (
            HelpMode.AUTO in self.settings.help_mode
            and token == self.settings.help_trigger
        )

    def match(self, tokens: Sequence[str]) -> MatchResult:
        """
        Match every token against the declared flags.

        Args:
            tokens (Sequence[str]): User arguments, after the `--` separator.

        Returns:
            MatchResult: Matches in input order and residual unflagged tokens.

        Raises:
            UserError: A flag is missing its value or has an invalid boolean value.
            HelpSignal: The help trigger was found and auto help is enabled.
        """
        result = MatchResult()
        i = 0
        while i < len(tokens):
            token = tokens[i]
            definition, flag, value = self._split_token(token)
            i += 1
            if definition is None:
                if self._is_help_trigger(token):
                    logger.debug("Help requested with '%s'", token)
                    raise HelpSignal()
                result.residual.append(token)
                continue

            if definition.kind is ArgumentType.BOOLEAN:
                value = self._boolean_value(definition, flag, value)
            elif value is None:
                if i >= len(tokens):
                    raise UserError(f"No value provided for argument {definition.name}")
                value = tokens[i]
                i += 1

            logger.debug(
                "Parsed argument %s = '%s' [flag: '%s']", definition.name, value, flag
            )
            result.matches.append(Match(definition=definition, raw_value=value, flag=flag))
        return result
