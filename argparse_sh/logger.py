# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for ArgParse-sh."""
import logging

logger: logging.Logger = logging.getLogger("argparse_sh")
