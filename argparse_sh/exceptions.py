# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by ArgParse-sh.

Two failure kinds exist, matching the two parties that can get something wrong:

- The script author, whose argument definitions are internally inconsistent
  (boolean with a default, duplicate flags, `--option` without a name, ...).
- The script user, whose command line cannot satisfy those definitions
  (missing required value, bad integer, unknown argument, invalid choice, ...).

All exceptions inherit from `ArgParseError`, and each one carries the exit code the
driver reports to the calling shell.

Exception Hierarchy:
- ArgParseError
    ├── DefinitionError
    └── UserError

Help requests are not errors; see `argparse_sh.signals.HelpSignal`.
"""

HELP_EXIT_CODE = 1
DEFINITION_EXIT_CODE = 2
USER_EXIT_CODE = 3


class ArgParseError(Exception):
    """Base exception for ArgParse-sh."""

    exit_code: int = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DefinitionError(ArgParseError):
    """Exception raised when argument definitions are inconsistent."""

    exit_code = DEFINITION_EXIT_CODE


class UserError(ArgParseError):
    """Exception raised when user input cannot satisfy the argument definitions."""

    exit_code = USER_EXIT_CODE
