# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `DefinitionSet`, the ordered collection of every argument declared for one
ArgParse-sh invocation, together with the indices the resolver needs.

Definitions are registered through `add_definition()` (or `add()` for a prebuilt
`Definition`), checked against each other, and frozen with `seal()` before any user
token is read.

Derived indices:
- flag → definition lookup (positive and negative flags)
- ordinal definitions, ascending by ordinal then by declaration order
- catch-all definitions, in declaration order

Example:
    definitions = DefinitionSet()
    definitions.add_definition(ArgumentType.STRING, "--given-name", ordinal=0)
    definitions.add_definition(
        "choice", "--gender", options=["male", "female"], mappings={"boy": "male"}
    )
    definitions.seal()
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping

from argparse_sh.exceptions import DefinitionError
from argparse_sh.logger import logger
from argparse_sh.parser.argument_type import ArgumentType
from argparse_sh.parser.definition import ChoiceOption, Definition


class DefinitionSet:
    """
    Owns all definitions for one invocation.

    Features:
    - Unique variable names and flags across definitions.
    - Flag lookup, ordinal ordering and catch-all ordering.
    - Sealing, after which the set is read-only.
    """

    def __init__(self) -> None:
        self._definitions: list[Definition] = []
        self._flag_map: dict[str, Definition] = {}
        self._name_map: dict[str, Definition] = {}
        self._sealed: bool = False

    def _normalize_options(
        self, options: Iterable[Any] | None
    ) -> tuple[ChoiceOption, ...]:
        if options is None:
            return ()
        if isinstance(options, (str, Mapping)):
            raise DefinitionError("options must be a list of names or (name, help) pairs")
        normalized = []
        for option in options:
            if isinstance(option, ChoiceOption):
                normalized.append(option)
            elif isinstance(option, str):
                normalized.append(ChoiceOption(option))
            elif isinstance(option, (tuple, list)) and len(option) == 2:
                name, help_text = option
                normalized.append(ChoiceOption(str(name), help_text))
            else:
                raise DefinitionError(
                    f"Invalid option {option!r}: expected a name or a (name, help) pair"
                )
        return tuple(normalized)

    def _normalize_mappings(
        self, mappings: Mapping[str, str] | Iterable[tuple[str, str]] | None
    ) -> dict[str, str]:
        if mappings is None:
            return {}
        pairs = mappings.items() if isinstance(mappings, Mapping) else mappings
        normalized: dict[str, str] = {}
        for pair in pairs:
            try:
                alias, target = pair
            except (TypeError, ValueError):
                raise DefinitionError(
                    f"Invalid mapping {pair!r}: expected a (from, to) pair"
                ) from None
            if alias in normalized:
                raise DefinitionError(f"Mapping '{alias}' is declared more than once")
            normalized[str(alias)] = str(target)
        return normalized

    def add_definition(
        self,
        kind: ArgumentType | str,
        *flags: str,
        name: str | None = None,
        default: str | None = None,
        description: str | None = None,
        required: bool = False,
        repeated: bool = False,
        secret: bool = False,
        catch_all: bool = False,
        ordinal: int | None = None,
        options: Iterable[Any] | None = None,
        mappings: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        negative_flags: Iterable[str] | None = None,
    ) -> Definition:
        """
        Declare a new argument.

        Args:
            kind (ArgumentType | str): Value kind, or its name/alias (e.g. "int").
            *flags (str): Flags selecting the argument (e.g. "--age", "-a").
            name (str | None): Variable name. Derived from the first flag if omitted.
            default (str | None): Raw default, used as-is when no value is given.
            description (str | None): Help text.
            required (bool): Whether a value must be supplied or defaulted.
            repeated (bool): Whether several values are accepted.
            secret (bool): Hide from help output.
            catch_all (bool): Accept unflagged tokens.
            ordinal (int | None): Positional priority for unflagged tokens.
            options (Iterable | None): Choice options, names or (name, help) pairs.
            mappings (Mapping | Iterable | None): Choice aliases, alias → target.
            negative_flags (Iterable[str] | None): Boolean flags setting `false`.

        Returns:
            Definition: The registered definition.
        """
        definition = Definition(
            kind=kind,  # type: ignore[arg-type]
            flags=tuple(flags),
            name=name or "",
            default=default,
            description=description,
            required=required,
            repeated=repeated,
            secret=secret,
            catch_all=catch_all,
            ordinal=ordinal,
            options=self._normalize_options(options),
            mappings=self._normalize_mappings(mappings),
            negative_flags=tuple(negative_flags or ()),
        )
        self.add(definition)
        return definition

    def add(self, definition: Definition) -> None:
        """Register a prebuilt definition."""
        if self._sealed:
            raise DefinitionError(
                f"Cannot add {definition.name}: the definition set is sealed"
            )
        if definition.name in self._name_map:
            raise DefinitionError(
                f"Name '{definition.name}' is already used by another argument"
            )
        for flag in definition.all_flags:
            if flag in self._flag_map:
                existing = self._flag_map[flag]
                raise DefinitionError(
                    f"Flag '{flag}' is already used by argument '{existing.name}'"
                )

        for flag in definition.all_flags:
            self._flag_map[flag] = definition
        self._name_map[definition.name] = definition
        self._definitions.append(definition)
        logger.debug("Definition - %s", definition.get_debug_info())

    def add_spec(self, spec: Mapping[str, Any]) -> Definition:
        """
        Declare an argument from a mapping of `add_definition()` keywords, where
        `kind` is required and `flags` is a list.
        """
        keywords = dict(spec)
        kind = keywords.pop("kind")
        flags = keywords.pop("flags", ())
        return self.add_definition(kind, *flags, **keywords)

    def seal(self) -> DefinitionSet:
        """Freeze the set. Further additions raise `DefinitionError`."""
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def definitions(self) -> tuple[Definition, ...]:
        return tuple(self._definitions)

    @property
    def ordinals(self) -> list[Definition]:
        """Ordinal definitions by ascending ordinal, ties in declaration order."""
        ordered = [
            (definition.ordinal, index, definition)
            for index, definition in enumerate(self._definitions)
            if definition.ordinal is not None
        ]
        return [definition for _, _, definition in sorted(ordered, key=lambda t: t[:2])]

    @property
    def catch_alls(self) -> list[Definition]:
        """Catch-all definitions in declaration order."""
        return [definition for definition in self._definitions if definition.catch_all]

    def find_flag(self, flag: str) -> Definition | None:
        """Return the definition owning `flag`, if any."""
        return self._flag_map.get(flag)

    def get_definition(self, name: str) -> Definition | None:
        """Return the definition with variable name `name`, if any."""
        return self._name_map.get(name)

    def to_definition_list(self) -> list[dict[str, Any]]:
        """
        Convert definitions into a serializable list of dicts.

        The keys mirror the fields accepted by `add_definition()` and by config files.
        """
        defs = []
        for definition in self._definitions:
            entry: dict[str, Any] = {
                "type": definition.kind.value,
                "name": definition.name,
                "flags": list(definition.flags),
                "default": definition.default,
                "description": definition.description,
                "required": definition.required,
                "repeated": definition.repeated,
                "secret": definition.secret,
                "catch_all": definition.catch_all,
                "ordinal": definition.ordinal,
            }
            if definition.kind is ArgumentType.CHOICE:
                entry["options"] = [
                    {"name": option.name, "help": option.help}
                    for option in definition.options
                ]
                entry["mappings"] = dict(definition.mappings)
            if definition.kind is ArgumentType.BOOLEAN:
                entry["negative_flags"] = list(definition.negative_flags)
            defs.append(entry)
        return defs

    def __iter__(self) -> Iterator[Definition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __str__(self) -> str:
        """Return a human-readable summary of the set."""
        required = sum(definition.required for definition in self._definitions)
        return (
            f"DefinitionSet(args={len(self._definitions)}, flags={len(self._flag_map)}, "
            f"ordinals={len(self.ordinals)}, catch_alls={len(self.catch_alls)}, "
            f"required={required})"
        )

    def __repr__(self) -> str:
        return str(self)
