# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Parses the definition stream: the tokens a script passes to ArgParse-sh before
the `--` separator.

Example:
    argparse-sh \\
      --string given-name first-name --ordinal 0 --required \\
      --integer age --flag -a --default 0 \\
      --choice gender --option male "Identifies as male" --map boy male \\
      --boolean verbose v --negative quiet \\
      --prefix DEMO_ --auto-help \\
      -- "$@"

Argument keywords:
    --string | --str, --integer | --int, --float | --number,
    --boolean | --bool, --choice | --pick

Per-argument parameters:
    --name NAME, --default VALUE, --description | --desc TEXT, --flag FLAG,
    --required, --secret, --repeated | --repeat, --catch-all,
    --ordinal | --order | --ord N, and bare words, which become `--word` flags.
    Choice only: --option NAME [HELP], --map FROM TO.
    Boolean only: --negative | --negative-flag FLAG.

Runtime options:
    --prefix P, --export, --debug, --autohelp | --auto-help,
    --help-function NAME, --columns | --cols N, --program-name NAME,
    --program-summary TEXT, --program-description TEXT, --config PATH

Every problem in the stream is a `DefinitionError`.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from argparse_sh.config import loader
from argparse_sh.exceptions import DefinitionError
from argparse_sh.parser.argument_type import ArgumentType
from argparse_sh.parser.definition import MAX_ORDINAL, as_flag, is_identifier
from argparse_sh.parser.definition_set import DefinitionSet
from argparse_sh.settings import Settings

SEPARATOR = "--"

TYPE_KEYWORDS: dict[str, ArgumentType] = {
    "--string": ArgumentType.STRING,
    "--str": ArgumentType.STRING,
    "--integer": ArgumentType.INTEGER,
    "--int": ArgumentType.INTEGER,
    "--float": ArgumentType.FLOAT,
    "--number": ArgumentType.FLOAT,
    "--boolean": ArgumentType.BOOLEAN,
    "--bool": ArgumentType.BOOLEAN,
    "--choice": ArgumentType.CHOICE,
    "--pick": ArgumentType.CHOICE,
}

SWITCH_PARAMETERS: dict[str, str] = {
    "--required": "required",
    "--secret": "secret",
    "--repeated": "repeated",
    "--repeat": "repeated",
    "--catch-all": "catch_all",
}

VALUE_PARAMETERS: dict[str, str] = {
    "--name": "name",
    "--default": "default",
    "--description": "description",
    "--desc": "description",
}

RUNTIME_SWITCHES: dict[str, str] = {
    "--export": "export",
    "--debug": "debug",
    "--autohelp": "auto_help",
    "--auto-help": "auto_help",
}

RUNTIME_VALUES: dict[str, str] = {
    "--prefix": "prefix",
    "--help-function": "help_function",
    "--program-name": "program_name",
    "--program-summary": "program_summary",
    "--program-description": "program_description",
}

IDENTIFIER_VALUES = ("prefix", "help_function")


@dataclass
class StreamResult:
    """Definitions, settings and the user tokens that follow the separator."""

    definitions: DefinitionSet
    settings: Settings
    user_tokens: list[str] = field(default_factory=list)


class DefinitionStreamParser:
    """Consumes a definition stream token by token."""

    def __init__(self, tokens: Sequence[str]):
        self._tokens: deque[str] = deque(tokens)
        self._definitions: list[dict[str, Any]] = []
        self._overrides: dict[str, Any] = {}
        self._config_path: Path | None = None

    def _pop_operand(self, option: str, what: str) -> str:
        if not self._tokens:
            raise DefinitionError(f"{what} must be provided after {option}")
        return self._tokens.popleft()

    def _parse_int(self, option: str, value: str, low: int, high: int, what: str) -> int:
        try:
            number = int(value)
        except ValueError:
            raise DefinitionError(
                f"Non-numeric value '{value}' provided for {what} after {option}"
            ) from None
        if not low <= number <= high:
            raise DefinitionError(
                f"{what.capitalize()} must be an integer between {low:,} and {high:,}"
            )
        return number

    def _parse_choice_parameter(self, token: str, spec: dict[str, Any]) -> bool:
        if token == "--option":
            option = self._pop_operand(token, "option")
            help_text = None
            if self._tokens and not self._tokens[0].startswith("-"):
                help_text = self._tokens.popleft()
            spec["options"].append((option, help_text))
            return True
        if token == "--map":
            source = self._pop_operand(token, "pair of values ({from} {to})")
            target = self._pop_operand(token, "pair of values ({from} {to})")
            spec["mappings"].append((source, target))
            return True
        return False

    def _parse_definition(self, kind: ArgumentType) -> dict[str, Any]:
        spec: dict[str, Any] = {"kind": kind, "flags": []}
        if kind is ArgumentType.CHOICE:
            spec["options"] = []
            spec["mappings"] = []
        if kind is ArgumentType.BOOLEAN:
            spec["negative_flags"] = []

        while self._tokens:
            token = self._tokens.popleft()
            if token in SWITCH_PARAMETERS:
                spec[SWITCH_PARAMETERS[token]] = True
            elif token in VALUE_PARAMETERS:
                key = VALUE_PARAMETERS[token]
                if key in spec:
                    raise DefinitionError(f"{token} is given more than once for one argument")
                spec[key] = self._pop_operand(token, key)
            elif token == "--flag":
                spec["flags"].append(self._pop_operand(token, "flag name"))
            elif token in ("--ordinal", "--order", "--ord"):
                if "ordinal" in spec:
                    raise DefinitionError(f"{token} is given more than once for one argument")
                value = self._pop_operand(token, "ordinal position")
                spec["ordinal"] = self._parse_int(
                    token, value, 0, MAX_ORDINAL, "ordinal position"
                )
            elif token in ("--negative", "--negative-flag"):
                if kind is not ArgumentType.BOOLEAN:
                    raise DefinitionError(f"{token} is only allowed on boolean arguments")
                spec["negative_flags"].append(
                    as_flag(self._pop_operand(token, "negative flag name"))
                )
            elif kind is ArgumentType.CHOICE and self._parse_choice_parameter(token, spec):
                continue
            elif token.startswith("-"):
                self._tokens.appendleft(token)
                break
            else:
                spec["flags"].append(as_flag(token))
        return spec

    def _parse_runtime_option(self, token: str) -> None:
        if token in RUNTIME_SWITCHES:
            self._overrides[RUNTIME_SWITCHES[token]] = True
        elif token in RUNTIME_VALUES:
            key = RUNTIME_VALUES[token]
            value = self._pop_operand(token, key.replace("_", " "))
            if key in IDENTIFIER_VALUES and value and not is_identifier(value):
                raise DefinitionError(
                    f"Value '{value}' for {token} must be a valid shell identifier "
                    "(letters, digits, and underscores only, not starting with a digit)"
                )
            self._overrides[key] = value
        elif token in ("--columns", "--cols"):
            value = self._pop_operand(token, "number of columns")
            self._overrides["columns"] = self._parse_int(
                token, value, 1, 10_000, "number of columns"
            )
        elif token == "--config":
            if self._config_path is not None:
                raise DefinitionError("--config can only be given once")
            self._config_path = Path(self._pop_operand(token, "config file path"))
        else:
            raise DefinitionError(f"Unrecognized option: {token}")

    def parse(self) -> StreamResult:
        """Consume the stream up to the separator and build the results."""
        while self._tokens:
            token = self._tokens.popleft()
            if token == SEPARATOR:
                break
            if token in TYPE_KEYWORDS:
                self._definitions.append(self._parse_definition(TYPE_KEYWORDS[token]))
            else:
                self._parse_runtime_option(token)

        definitions = DefinitionSet()
        settings_values: dict[str, Any] = {}
        if self._config_path is not None:
            config = loader(self._config_path)
            settings_values.update(config.settings_values())
            config.to_definition_set(definitions)
        settings_values.update(self._overrides)

        for spec in self._definitions:
            definitions.add_spec(spec)

        return StreamResult(
            definitions=definitions,
            settings=Settings(**settings_values),
            user_tokens=list(self._tokens),
        )


def parse_definition_stream(tokens: Sequence[str]) -> StreamResult:
    """
    Parse definition and runtime option tokens.

    Args:
        tokens (Sequence[str]): Everything after the program name.

    Returns:
        StreamResult: The definition set (not yet sealed), the settings and the
            user tokens after the `--` separator.

    Raises:
        DefinitionError: For any malformed definition or runtime option.
    """
    return DefinitionStreamParser(tokens).parse()
