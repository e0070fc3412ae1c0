"""
Console message formatting.

Small helpers so every module prints status lines the same way. ANSI
colors are dropped when stdout is not a terminal or NO_COLOR is set.
"""

import os
import sys

_RESET = "\033[0m"
_COLORS = {
    "bold": "\033[1m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "cyan": "\033[36m",
    "dim": "\033[2m",
}


def _use_color() -> bool:
    return sys.stdout.isatty() and "NO_COLOR" not in os.environ


def _style(text: str, color: str) -> str:
    if not _use_color():
        return text
    return f"{_COLORS[color]}{text}{_RESET}"


def title_bar(text: str) -> str:
    return _style(text, "bold")


def step_complete(text: str) -> str:
    return _style(f"  -> {text}", "green")


def saved_to(text: str) -> str:
    return _style(f"  {text}", "dim")


def success(text: str) -> str:
    return _style(text, "green")


def warning(text: str) -> str:
    return _style(f"Warning: {text}", "yellow")


def error(text: str) -> str:
    return _style(f"Error: {text}", "red")
