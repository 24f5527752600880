# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Definition` dataclass used by `DefinitionSet` to represent one declared
shell-script argument in a structured, introspectable format.

Each `Definition` describes one input of the calling script: its value kind, the
flags that select it, the environment variable it is written to, its constraints,
and the type-specific data (choice options and aliases, boolean negative flags).

A `Definition` checks its own shape when it is constructed and raises
`DefinitionError` for anything inconsistent. Cross-definition rules (unique names
and flags) are enforced by `DefinitionSet`.

Key Attributes:
- `kind`: `ArgumentType` of the values (string, integer, float, boolean, choice)
- `name`: Environment variable name, explicit or derived from the first flag
- `flags`: Flags selecting the argument (e.g. `--given-name`, `-a`)
- `default`: Raw default, never validated or mapped
- `required` / `repeated` / `secret` / `catch_all` / `ordinal`: Constraints
- `options` / `mappings`: Choice options and alias → target lookups
- `negative_flags`: Boolean flags that force `false`

Used By:
- `DefinitionSet`
- `TokenMatcher`, `Resolver`, validator and `HelpRenderer`
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from argparse_sh.exceptions import DefinitionError
from argparse_sh.parser.argument_type import ArgumentType

MAX_ORDINAL = 65535

_NAME_PART = re.compile(r"[a-zA-Z0-9]+")
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def normalize_name(flag: str) -> str:
    """
    Derive an environment variable name from a flag.

    Alphanumeric runs are kept, everything between them collapses to a single
    underscore, and the result is uppercased.

    Example:
        normalize_name("--given-name") → "GIVEN_NAME"
        normalize_name("--kinda----rainy") → "KINDA_RAINY"
    """
    return "_".join(_NAME_PART.findall(flag)).upper()


def as_flag(token: str) -> str:
    """Turn a bare word into a long flag; tokens starting with `-` are kept as-is."""
    return token if token.startswith("-") else f"--{token}"


def is_identifier(name: str) -> bool:
    """Return True if `name` is usable as a shell variable name."""
    return _IDENTIFIER.fullmatch(name) is not None


@dataclass(frozen=True)
class ChoiceOption:
    """One selectable value of a choice argument."""

    name: str
    help: str | None = None


@dataclass(eq=False)
class Definition:
    """
    Represents one declared argument.

    Attributes:
        kind (ArgumentType): The value kind of the argument.
        flags (tuple[str, ...]): Flags selecting the argument, in declaration order.
        name (str): The environment variable name. Derived from the first flag
            when left empty.
        default (str | None): Raw default used when no value is supplied.
        description (str | None): Help text for the argument.
        required (bool): True if a value must be supplied or defaulted.
        repeated (bool): True if the argument accepts several values.
        secret (bool): True to leave the argument out of help output.
        catch_all (bool): True if unflagged tokens may be assigned to it.
        ordinal (int | None): Positional priority for unflagged tokens.
        options (tuple[ChoiceOption, ...]): Choice options.
        mappings (dict[str, str]): Choice aliases, alias → target.
        negative_flags (tuple[str, ...]): Boolean flags that set `false`.
    """

    kind: ArgumentType
    flags: tuple[str, ...] = ()
    name: str = ""
    default: str | None = None
    description: str | None = None
    required: bool = False
    repeated: bool = False
    secret: bool = False
    catch_all: bool = False
    ordinal: int | None = None
    options: tuple[ChoiceOption, ...] = ()
    mappings: dict[str, str] = field(default_factory=dict)
    negative_flags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ArgumentType):
            try:
                self.kind = ArgumentType(self.kind)
            except ValueError as error:
                raise DefinitionError(str(error)) from error
        self.flags = tuple(self.flags)
        self.options = tuple(self.options)
        self.negative_flags = tuple(self.negative_flags)
        self._validate_flags(self.flags + self.negative_flags)
        self.name = self._resolve_name()
        self._validate_positioning()
        self._validate_ordinal()
        self._validate_type_fields()

    def _validate_flags(self, flags: tuple[str, ...]) -> None:
        seen: set[str] = set()
        for flag in flags:
            if not isinstance(flag, str) or not flag:
                raise DefinitionError(f"Flag {flag!r} must be a non-empty string")
            if "=" in flag:
                raise DefinitionError(f"Flag '{flag}' must not contain '='")
            if flag in seen:
                raise DefinitionError(f"Flag '{flag}' is declared more than once")
            seen.add(flag)

    def _resolve_name(self) -> str:
        if self.name:
            if not is_identifier(self.name):
                raise DefinitionError(
                    f"Name '{self.name}' must be a valid identifier "
                    "(letters, digits, and underscores only, not starting with a digit)"
                )
            return self.name
        if not self.flags:
            raise DefinitionError("No name or flags provided for argument")
        name = normalize_name(self.flags[0])
        if not is_identifier(name):
            raise DefinitionError(
                f"Cannot derive a variable name from flag '{self.flags[0]}'; "
                "provide one with --name"
            )
        return name

    def _validate_positioning(self) -> None:
        if not self.flags and not self.catch_all and self.ordinal is None:
            raise DefinitionError(
                f"{self.name} argument can not be set - "
                "no flags, no ordinal, and not a catch-all argument"
            )

    def _validate_ordinal(self) -> None:
        if self.ordinal is None:
            return
        if isinstance(self.ordinal, bool) or not isinstance(self.ordinal, int):
            raise DefinitionError(
                f"Ordinal position for {self.name} must be an integer"
            )
        if not 0 <= self.ordinal <= MAX_ORDINAL:
            raise DefinitionError(
                f"Ordinal position for {self.name} must be an integer "
                f"between 0 and {MAX_ORDINAL:,}"
            )

    def _validate_type_fields(self) -> None:
        if self.kind is ArgumentType.BOOLEAN:
            rejected = {
                "--default": self.default is not None,
                "--required": self.required,
                "--repeated": self.repeated,
                "--catch-all": self.catch_all,
                "--ordinal": self.ordinal is not None,
            }
            for parameter, present in rejected.items():
                if present:
                    raise DefinitionError(
                        f"Boolean argument {self.name} does not accept {parameter}"
                    )
        elif self.negative_flags:
            raise DefinitionError(
                f"Negative flags are only allowed on boolean arguments ({self.name})"
            )

        if self.kind is ArgumentType.CHOICE:
            self._validate_choices()
        elif self.options or self.mappings:
            raise DefinitionError(
                f"Options and mappings are only allowed on choice arguments ({self.name})"
            )

    def _validate_choices(self) -> None:
        option_names: set[str] = set()
        for option in self.options:
            if option.name in option_names:
                raise DefinitionError(
                    f"Option '{option.name}' is declared more than once for {self.name}"
                )
            option_names.add(option.name)
        for alias in self.mappings:
            if alias in option_names:
                raise DefinitionError(
                    f"Mapping '{alias}' for {self.name} collides with an option "
                    "of the same name"
                )
        if not option_names and not self.mappings:
            raise DefinitionError(
                f"Choice argument {self.name} must declare at least one --option"
            )

    @property
    def is_positional(self) -> bool:
        """True if unflagged tokens may be assigned to this argument."""
        return self.catch_all or self.ordinal is not None

    @property
    def all_flags(self) -> tuple[str, ...]:
        """Positive flags followed by negative flags."""
        return self.flags + self.negative_flags

    @property
    def valid_values(self) -> list[str]:
        """Option names followed by aliases, for choice arguments."""
        return [option.name for option in self.options] + list(self.mappings)

    def lookup_choice(self, value: str) -> str | None:
        """
        Resolve a choice input to the value written out.

        Aliases resolve to their target with a single lookup, so an alias whose
        target is itself an alias is not followed any further.
        """
        if value in self.mappings:
            return self.mappings[value]
        if any(option.name == value for option in self.options):
            return value
        return None

    def get_debug_info(self) -> str:
        """Terse one-line representation, used in debug output."""
        info = f"type: {self.kind.label}; name: {self.name}; flags: {', '.join(self.flags)}"
        if self.negative_flags:
            info += f"; negative flags: {', '.join(self.negative_flags)}"
        if self.required:
            info += "; required"
        if self.repeated:
            info += "; repeated"
        if self.secret:
            info += "; secret"
        if self.catch_all:
            info += "; catch-all"
        if self.ordinal is not None:
            info += f"; ordinal: {self.ordinal}"
        if self.default is not None:
            info += f"; default: {self.default}"
        if self.description is not None:
            info += f"; description: {self.description}"
        if self.kind is ArgumentType.CHOICE:
            entries = [option.name for option in self.options]
            entries.extend(f"{alias} -> {target}" for alias, target in self.mappings.items())
            info += f"; options: {', '.join(entries)}"
        return info

    def __str__(self) -> str:
        return f"Definition({self.kind.label} {self.name})"

    def __repr__(self) -> str:
        return str(self)
