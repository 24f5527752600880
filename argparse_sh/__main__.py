"""
ArgParse-sh

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging
import sys
from typing import Sequence

from argparse_sh.definition_stream import parse_definition_stream
from argparse_sh.emitter import ShellEchoHandler, ShellEmitter
from argparse_sh.exceptions import (
    DEFINITION_EXIT_CODE,
    HELP_EXIT_CODE,
    ArgParseError,
    DefinitionError,
)
from argparse_sh.logger import logger
from argparse_sh.parser import HelpResult, ShellArgumentParser
from argparse_sh.settings import HelpMode, Settings
from argparse_sh.utils import setup_logging


def debug_setup(parser: ShellArgumentParser) -> None:
    settings = parser.settings
    logger.debug("ArgParse debugging enabled with --debug flag")
    logger.debug(
        "Arguments %s exported to child processes",
        "are" if settings.export else "are not",
    )
    if settings.prefix:
        logger.debug("All variables will be prefixed with '%s'", settings.prefix)
    if HelpMode.AUTO in settings.help_mode:
        logger.debug(
            "Help text will be printed if '%s' is found in arguments",
            settings.help_trigger,
        )
    if HelpMode.FUNCTION in settings.help_mode:
        logger.debug(
            "Help text will be available from the '%s' shell function",
            settings.help_function,
        )
    logger.debug("")
    for definition in parser.definitions:
        logger.debug("Definition - %s", definition.get_debug_info())


def run(argv: Sequence[str], emitter: ShellEmitter) -> int:
    stream = parse_definition_stream(argv)
    emitter.settings = stream.settings

    debug_handler: logging.Handler | None = None
    if stream.settings.debug:
        debug_handler = ShellEchoHandler(emitter)
        logger.addHandler(debug_handler)
    try:
        parser = ShellArgumentParser(stream.settings, stream.definitions)
        if debug_handler:
            debug_setup(parser)

        result = parser.run(stream.user_tokens)
        if isinstance(result, HelpResult):
            emitter.emit_help(parser.get_help())
            return HELP_EXIT_CODE

        emitter.emit_records(result.records)
        if HelpMode.FUNCTION in stream.settings.help_mode:
            emitter.emit_help_function(stream.settings.help_function, parser.get_help())
        logger.debug("ArgParse completed successfully")
        return 0
    finally:
        if debug_handler:
            logger.removeHandler(debug_handler)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run ArgParse-sh on `argv` (defaults to `sys.argv[1:]`), writing shell
    statements to standard output and returning the exit status.
    """
    setup_logging(console_log_level=logging.WARNING)
    emitter = ShellEmitter(Settings())
    try:
        return run(sys.argv[1:] if argv is None else list(argv), emitter)
    except DefinitionError as error:
        logger.debug("Definition error: %s", error.message)
        emitter.emit_error(error)
        return DEFINITION_EXIT_CODE
    except ArgParseError as error:
        logger.debug("User error: %s", error.message)
        emitter.emit_error(error)
        return error.exit_code


if __name__ == "__main__":
    sys.exit(main())
