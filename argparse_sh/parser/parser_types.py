# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Data structures passed between the stages of ArgParse-sh's resolution pipeline.

Each stage consumes the previous stage's output and produces a new, independently
owned result:

- `Match` / `MatchResult`: Output of `TokenMatcher`, flag matches in input order
  plus the unflagged tokens left for positional assignment.
- `ResolvedValue`: Per-definition outcome of `Resolver`, completed by validation.
- `ResolvedRecord`: What the caller writes out, one per set variable.
- `ParseResult` / `HelpResult`: The two non-error outcomes of a parse.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from argparse_sh.parser.definition import Definition


@dataclass(frozen=True)
class Match:
    """A raw value claimed by a definition through one of its flags."""

    definition: Definition
    raw_value: str
    flag: str


@dataclass
class MatchResult:
    """Flag matches in input order and the residual unflagged tokens."""

    matches: list[Match] = field(default_factory=list)
    residual: list[str] = field(default_factory=list)


@dataclass
class ResolvedValue:
    """
    Tracks the values gathered for one definition.

    Attributes:
        definition (Definition): The definition the values belong to.
        raw_values (list[str]): Raw strings in the order they were assigned.
        from_default (bool): True if `raw_values` holds the definition's default.
        values (list[Any]): Typed values, filled in by validation. Defaults are
            copied through unchanged.
    """

    definition: Definition
    raw_values: list[str] = field(default_factory=list)
    from_default: bool = False
    values: list[Any] = field(default_factory=list)

    @property
    def is_absent(self) -> bool:
        return not self.raw_values

    @property
    def is_explicit(self) -> bool:
        """True if the values came from the command line."""
        return bool(self.raw_values) and not self.from_default

    def add(self, raw_value: str) -> None:
        self.raw_values.append(raw_value)


@dataclass(frozen=True)
class ResolvedRecord:
    """
    One variable to be written for the calling script.

    Repeated arguments carry every value; the base variable receives the count and
    each element gets `<name>_<index>`.
    """

    name: str
    value: str | tuple[str, ...]
    repeated: bool = False

    def assignments(self, prefix: str = "") -> list[tuple[str, str]]:
        """Expand into `(variable, value)` pairs with `prefix` applied to each name."""
        if not self.repeated:
            assert isinstance(self.value, str), "non-repeated record holds one value"
            return [(f"{prefix}{self.name}", self.value)]
        values = self.value if isinstance(self.value, tuple) else (self.value,)
        pairs = [(f"{prefix}{self.name}", str(len(values)))]
        pairs.extend(
            (f"{prefix}{self.name}_{index}", value) for index, value in enumerate(values)
        )
        return pairs


@dataclass(frozen=True)
class ParseResult:
    """Successful resolution, records in definition order."""

    records: tuple[ResolvedRecord, ...]

    def as_dict(self, prefix: str = "") -> dict[str, str]:
        """Flatten every record into a variable → value mapping."""
        flattened: dict[str, str] = {}
        for record in self.records:
            flattened.update(record.assignments(prefix))
        return flattened


@dataclass(frozen=True)
class HelpResult:
    """Help was requested; holds the rendered lines. Not an error."""

    lines: tuple[str, ...]
    is_error: bool = False
