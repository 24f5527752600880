# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `Resolver`, which turns the matcher's output into one `ResolvedValue`
per definition.

Resolution order:
1. Flag matches are grouped per definition in arrival order.
2. A non-repeated definition with more than one flag value is a user error.
3. Residual tokens are assigned left to right. Each token goes to the lowest
   unfilled ordinal definition; once every ordinal is filled, to the first
   catch-all that can still take a value (a non-repeated catch-all takes one,
   a repeated one takes any number). A token nobody takes is a user error.
4. Definitions still without a value fall back to their default, fail when
   required, or stay absent.

Ordinals strictly take precedence over catch-alls, and a token never skips an
unfilled lower ordinal to reach a higher one.
"""
from __future__ import annotations

from collections import deque

from argparse_sh.exceptions import UserError
from argparse_sh.logger import logger
from argparse_sh.parser.definition import Definition
from argparse_sh.parser.definition_set import DefinitionSet
from argparse_sh.parser.parser_types import MatchResult, ResolvedValue


class Resolver:
    """Assigns matched and positional values to definitions."""

    def __init__(self, definitions: DefinitionSet):
        self.definitions = definitions

    def _group_matches(self, match_result: MatchResult) -> dict[str, ResolvedValue]:
        resolved = {
            definition.name: ResolvedValue(definition) for definition in self.definitions
        }
        for match in match_result.matches:
            resolved[match.definition.name].add(match.raw_value)

        for definition in self.definitions:
            if not definition.repeated and len(resolved[definition.name].raw_values) > 1:
                raise UserError(f"Multiple values found for argument {definition.name}")
        return resolved

    def _next_consumer(
        self,
        ordinals: deque[Definition],
        resolved: dict[str, ResolvedValue],
    ) -> tuple[Definition | None, str]:
        while ordinals and not resolved[ordinals[0].name].is_absent:
            ordinals.popleft()
        if ordinals:
            definition = ordinals.popleft()
            return definition, f"ordinal: {definition.ordinal}"

        for definition in self.definitions.catch_alls:
            if definition.repeated or resolved[definition.name].is_absent:
                return definition, "catch-all"
        return None, ""

    def _assign_residual(
        self, residual: list[str], resolved: dict[str, ResolvedValue]
    ) -> None:
        ordinals = deque(self.definitions.ordinals)
        for token in residual:
            definition, source = self._next_consumer(ordinals, resolved)
            if definition is None:
                raise UserError(
                    f"Unrecognized argument '{token}' passed and no catch-all argument found"
                )
            logger.debug("Parsed argument %s = '%s' [%s]", definition.name, token, source)
            resolved[definition.name].add(token)

    def _apply_defaults(self, resolved: dict[str, ResolvedValue]) -> None:
        for definition in self.definitions:
            value = resolved[definition.name]
            if not value.is_absent:
                continue
            if definition.default is not None:
                value.add(definition.default)
                value.from_default = True
            elif definition.required:
                raise UserError(f"Value for argument {definition.name} is missing")

    def resolve(self, match_result: MatchResult) -> dict[str, ResolvedValue]:
        """
        Resolve matches and residual tokens into per-definition values.

        Args:
            match_result (MatchResult): Output of `TokenMatcher.match()`.

        Returns:
            dict[str, ResolvedValue]: Keyed by variable name, in declaration order.

        Raises:
            UserError: Duplicate values, an unclaimed token or a missing
                required value.
        """
        resolved = self._group_matches(match_result)
        self._assign_residual(match_result.residual, resolved)
        self._apply_defaults(resolved)
        return resolved
