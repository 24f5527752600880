# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for ArgParse-sh argument definitions.

Scripts with many arguments can keep their definitions in a YAML or TOML file and
pass it with `--config PATH`. Runtime options given on the command line override
the values from the file, and arguments declared on the command line are added
after the ones from the file.

Example (YAML):
    prefix: DEMO_
    auto_help: true
    program_name: demo
    arguments:
      - type: string
        flags: [given-name, first-name]
        ordinal: 0
        required: true
      - type: choice
        flags: [gender]
        options:
          - name: male
            help: Person identifies as male
          - female
        mappings:
          boy: male
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from argparse_sh.exceptions import DefinitionError
from argparse_sh.logger import logger
from argparse_sh.parser.argument_type import ArgumentType
from argparse_sh.parser.definition import as_flag, is_identifier
from argparse_sh.parser.definition_set import DefinitionSet
from argparse_sh.settings import DEFAULT_COLUMNS, DEFAULT_HELP_TRIGGER


def _to_text(value: Any) -> Any:
    """YAML and TOML turn `0` or `true` into native types; defaults stay strings."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class RawOption(BaseModel):
    """One choice option from a config file."""

    model_config = ConfigDict(extra="forbid")

    name: str
    help: str | None = None


class RawDefinition(BaseModel):
    """One argument definition from a config file."""

    model_config = ConfigDict(extra="forbid")

    type: ArgumentType
    flags: list[str] = Field(default_factory=list)
    name: str | None = None
    default: str | None = None
    description: str | None = None
    required: bool = False
    repeated: bool = False
    secret: bool = False
    catch_all: bool = False
    ordinal: int | None = None
    options: list[RawOption | str] = Field(default_factory=list)
    mappings: dict[str, str] = Field(default_factory=dict)
    negative_flags: list[str] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, value: Any) -> ArgumentType:
        return ArgumentType(value)

    @field_validator("default", "name", "description", mode="before")
    @classmethod
    def validate_text(cls, value: Any) -> Any:
        return _to_text(value)

    @field_validator("mappings", mode="before")
    @classmethod
    def validate_mappings(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {_to_text(alias): _to_text(target) for alias, target in value.items()}
        return value

    def to_spec(self) -> dict[str, Any]:
        """Keyword arguments for `DefinitionSet.add_definition()`."""
        spec: dict[str, Any] = {
            "kind": self.type,
            "flags": [as_flag(flag) for flag in self.flags],
            "name": self.name,
            "default": self.default,
            "description": self.description,
            "required": self.required,
            "repeated": self.repeated,
            "secret": self.secret,
            "catch_all": self.catch_all,
            "ordinal": self.ordinal,
        }
        if self.options:
            spec["options"] = [
                (option, None) if isinstance(option, str) else (option.name, option.help)
                for option in self.options
            ]
        if self.mappings:
            spec["mappings"] = dict(self.mappings)
        if self.negative_flags:
            spec["negative_flags"] = [as_flag(flag) for flag in self.negative_flags]
        return spec


class ArgParseConfig(BaseModel):
    """ArgParse-sh configuration model."""

    model_config = ConfigDict(extra="forbid")

    prefix: str = ""
    export: bool = False
    debug: bool = False
    program_name: str | None = None
    program_summary: str | None = None
    program_description: str | None = None
    columns: int = Field(default=DEFAULT_COLUMNS, gt=0)
    auto_help: bool = False
    help_function: str | None = None
    help_trigger: str = DEFAULT_HELP_TRIGGER
    arguments: list[RawDefinition] = Field(default_factory=list)

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, value: str) -> str:
        if value and not is_identifier(value):
            raise ValueError(f"prefix '{value}' must be a valid shell identifier")
        return value

    @field_validator("help_function")
    @classmethod
    def validate_help_function(cls, value: str | None) -> str | None:
        if value is not None and not is_identifier(value):
            raise ValueError(
                f"help_function '{value}' must be a valid shell identifier"
            )
        return value

    def settings_values(self) -> dict[str, Any]:
        """Settings explicitly present in the file."""
        return self.model_dump(exclude={"arguments"}, exclude_unset=True)

    def definition_specs(self) -> list[dict[str, Any]]:
        return [definition.to_spec() for definition in self.arguments]

    def to_definition_set(self, definitions: DefinitionSet | None = None) -> DefinitionSet:
        """Add the configured arguments to `definitions` (a new set if None)."""
        if definitions is None:
            definitions = DefinitionSet()
        for spec in self.definition_specs():
            definitions.add_spec(spec)
        return definitions


def loader(file_path: Path | str) -> ArgParseConfig:
    """
    Load ArgParse-sh configuration from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file (`.yaml`, `.yml` or `.toml`).

    Returns:
        ArgParseConfig: The validated configuration.

    Raises:
        DefinitionError: If the file is missing, has an unsupported format, cannot
            be parsed, or does not match the configuration model.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise DefinitionError(f"No such config file: {file_path}")

    suffix = path.suffix
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise DefinitionError(f"Unsupported config format: {suffix}")
    except (yaml.YAMLError, toml.TomlDecodeError) as error:
        raise DefinitionError(f"Could not parse config file {path}: {error}") from error

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise DefinitionError(
            "Configuration file must contain a mapping of settings with a list of "
            "arguments.\n"
            "Example:\n"
            "prefix: 'DEMO_'\n"
            "arguments:\n"
            "  - type: string\n"
            "    flags: ['name']"
        )

    try:
        config = ArgParseConfig.model_validate(raw_config)
    except ValidationError as error:
        raise DefinitionError(f"Invalid config file {path}: {error}") from error
    logger.debug("Loaded %d argument(s) from %s", len(config.arguments), path)
    return config
