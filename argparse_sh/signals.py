# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by ArgParse-sh.

Signals inherit from `FlowSignal`, a subclass of `BaseException`, so they bypass
standard `except Exception` blocks and are never mistaken for failures.

Signals:
- HelpSignal: The help trigger was found in the user arguments.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in ArgParse-sh.

    These are not errors. They interrupt parsing when the user asks for something
    other than a parse result.
    """


class HelpSignal(FlowSignal):
    """Raised to display help information."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)
