# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains per-type validation and conversion of user-supplied argument values.

Every explicit raw value is converted by the rule of its definition's
`ArgumentType`; defaults are copied through untouched. Conversion functions are
pure: the same raw input always converts to the same value.

Functions:
- validate_value: Convert one raw string for a definition.
- format_value: Render a converted value as the string written to the shell.
- validate_resolved: Validate every resolved value, stopping at the first failure.
"""
from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Callable

from argparse_sh.exceptions import UserError
from argparse_sh.parser.argument_type import ArgumentType
from argparse_sh.parser.definition import Definition
from argparse_sh.parser.parser_types import ResolvedValue

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def validate_string(definition: Definition, value: str) -> str:
    return value


def validate_integer(definition: Definition, value: str) -> int:
    """Parse a signed 64-bit integer. Whitespace and underscores are rejected."""
    if _INTEGER.fullmatch(value):
        number = int(value)
        if INT64_MIN <= number <= INT64_MAX:
            return number
    raise UserError(
        f"Non-integer value '{value}' provided for argument {definition.name}"
    )


def validate_float(definition: Definition, value: str) -> float:
    """Parse a 64-bit float, including `inf` and `nan`."""
    if _FLOAT.fullmatch(value):
        return float(value)
    raise UserError(
        f"Non-numeric value '{value}' provided for argument {definition.name}"
    )


def validate_boolean(definition: Definition, value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise UserError(
        f"Non-boolean value '{value}' provided for argument {definition.name}"
    )


def validate_choice(definition: Definition, value: str) -> str:
    """Accept an option name or alias. Aliases resolve with a single lookup."""
    choice = definition.lookup_choice(value)
    if choice is None:
        raise UserError(
            f"Value '{value}' not recognized for argument {definition.name}; "
            f"must be one of {{{', '.join(definition.valid_values)}}}"
        )
    return choice


VALIDATORS: dict[ArgumentType, Callable[[Definition, str], Any]] = {
    ArgumentType.STRING: validate_string,
    ArgumentType.INTEGER: validate_integer,
    ArgumentType.FLOAT: validate_float,
    ArgumentType.BOOLEAN: validate_boolean,
    ArgumentType.CHOICE: validate_choice,
}


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def validate_value(definition: Definition, value: str) -> Any:
    """
    Convert one raw value for `definition`.

    Raises:
        UserError: If the value is invalid for the definition's type.
    """
    return VALIDATORS[definition.kind](definition, value)


def format_value(definition: Definition, value: Any) -> str:
    """
    Render a converted value as the string assigned in the shell.

    Integers drop leading zeros and `+`. Floats are written in positional
    notation without an exponent or trailing zeros, keeping the sign of `-0`.
    Booleans become `true`/`false`.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def validate_resolved(resolved: dict[str, ResolvedValue]) -> dict[str, ResolvedValue]:
    """
    Validate explicit values in declaration order, then value order.

    Values that came from a default are copied to `values` unchanged. The first
    invalid value raises; nothing is collected past it.
    """
    for resolved_value in resolved.values():
        if resolved_value.from_default:
            resolved_value.values = list(resolved_value.raw_values)
            continue
        resolved_value.values = [
            validate_value(resolved_value.definition, raw)
            for raw in resolved_value.raw_values
        ]
    return resolved
