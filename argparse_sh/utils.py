# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os

import pythonjsonlogger.json
from rich.logging import RichHandler

from argparse_sh.console import console

LOG_MODE_ENV = "ARGPARSE_SH_LOG_MODE"
LOG_FILE_ENV = "ARGPARSE_SH_LOG_FILE"

JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            console=console,
            rich_tracebacks=True,
            show_time=False,
            show_level=True,
            show_path=False,
            markup=False,
        )
    if mode == "json":
        handler = logging.StreamHandler(console.file)
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
        return handler
    raise ValueError(f"Invalid log mode: {mode}")


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
):
    """
    Configure logging for one ArgParse-sh run.

    Standard output is reserved for the shell statements the calling script
    evaluates, so console logs always go to standard error. Since the tool runs
    inside `eval "$(...)"`, where its command line is hard to change, both the
    console format and the log file can also be chosen from the environment.

    Args:
        mode (str | None): "cli" for Rich output (default) or "json" for
            structured logs. Falls back to `ARGPARSE_SH_LOG_MODE`.
        log_filename (str | None): Log file to append to. Falls back to
            `ARGPARSE_SH_LOG_FILE`; no file handler is installed without one.
        json_log_to_file (bool): Write the log file as JSON lines.
        file_log_level (int): Level for the log file. Defaults to DEBUG.
        console_log_level (int): Level for stderr. Defaults to WARNING.

    Raises:
        ValueError: If an invalid logging `mode` is passed.
    """
    mode = mode or os.getenv(LOG_MODE_ENV) or "cli"
    log_filename = log_filename or os.getenv(LOG_FILE_ENV)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if root.hasHandlers():
        root.handlers.clear()

    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            formatter: logging.Formatter = pythonjsonlogger.json.JsonFormatter(
                JSON_LOG_FORMAT
            )
        else:
            formatter = logging.Formatter(
                "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.getLogger("argparse_sh").debug("Logging initialized in '%s' mode.", mode)
