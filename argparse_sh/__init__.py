"""
ArgParse-sh

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import ArgParseError, DefinitionError, UserError
from .parser import ArgumentType, DefinitionSet, ShellArgumentParser
from .settings import Settings

logger = logging.getLogger("argparse_sh")


__all__ = [
    "ArgParseError",
    "ArgumentType",
    "DefinitionError",
    "DefinitionSet",
    "Settings",
    "ShellArgumentParser",
    "UserError",
]
