# ArgParse-sh — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for ArgParse-sh.

Standard output belongs to the shell statements the calling script evaluates, so
everything meant for a human goes to standard error.
"""
from rich.console import Console

console = Console(stderr=True, highlight=False)
