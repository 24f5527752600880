"""
ArgParse-sh

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument_type import ArgumentType
from .definition import ChoiceOption, Definition, normalize_name
from .definition_set import DefinitionSet
from .help_renderer import HelpDocument, HelpRenderer, cleanup_help_text, wrap_text
from .matcher import TokenMatcher
from .parser_types import HelpResult, Match, MatchResult, ParseResult, ResolvedRecord
from .resolver import Resolver
from .shell_argument_parser import ShellArgumentParser
from .validator import format_value, validate_resolved, validate_value

__all__ = [
    "ArgumentType",
    "ChoiceOption",
    "Definition",
    "DefinitionSet",
    "HelpDocument",
    "HelpRenderer",
    "HelpResult",
    "Match",
    "MatchResult",
    "ParseResult",
    "ResolvedRecord",
    "Resolver",
    "ShellArgumentParser",
    "TokenMatcher",
    "cleanup_help_text",
    "format_value",
    "normalize_name",
    "validate_resolved",
    "validate_value",
    "wrap_text",
]
