# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentType`, the closed set of value kinds an ArgParse-sh argument can
declare.

The type decides which type-specific fields a `Definition` may carry and which
validation rule applies to user-supplied values. Every consumer (validator, help
renderer, definition checks) dispatches on it exhaustively.

Supports alias coercion for the shorthand keywords accepted in definition streams
and config files.

Exports:
    - ArgumentType: Enum of the supported argument kinds.

Example:
    ArgumentType("integer") → ArgumentType.INTEGER
    ArgumentType("int")     → ArgumentType.INTEGER (via alias)
    ArgumentType("pick")    → ArgumentType.CHOICE (via alias)
"""
from __future__ import annotations

from enum import Enum


class ArgumentType(Enum):
    """
    Defines the kind of value an argument accepts.

    Members:
        STRING: Any text, passed through unchanged.
        INTEGER: A signed 64-bit integer.
        FLOAT: A 64-bit IEEE floating point number.
        BOOLEAN: A flag, `true` when present, `false` via negative flags.
        CHOICE: One of a declared list of options, with optional aliases.

    Aliases:
        - "str" → "string"
        - "int" → "integer"
        - "number" → "float"
        - "bool" → "boolean"
        - "pick" → "choice"
    """

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    CHOICE = "choice"

    @classmethod
    def choices(cls) -> list[ArgumentType]:
        """Return a list of all argument types."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "int": "integer",
            "number": "float",
            "bool": "boolean",
            "pick": "choice",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ArgumentType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def label(self) -> str:
        """Capitalised name used in debug output, e.g. `Integer`."""
        return self.value.capitalize()

    def __str__(self) -> str:
        """Return the string representation of the argument type."""
        return self.value
