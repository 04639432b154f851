"""ANSI styling for log output and the dispatch trace.

Colors are disabled when NO_COLOR is set, forced on with FORCE_COLOR, and
otherwise used only when the stream is a TTY.
"""

import logging
import os
import sys
from typing import TextIO

__all__ = [
    "BOLD",
    "CYAN",
    "DIM",
    "LEVEL_STYLES",
    "RED",
    "RESET",
    "YELLOW",
    "DispatchStyles",
    "LogStyles",
    "colorize",
    "make_style",
    "should_colorize",
]

_ESC = "\x1b["

RESET = f"{_ESC}0m"

# SGR attributes
BOLD = "1"
DIM = "2"

# SGR foreground colors
RED = "31"
YELLOW = "33"
CYAN = "36"


def _sgr(codes: tuple[str, ...]) -> str:
    return f"{_ESC}{';'.join(codes)}m" if codes else ""


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether ANSI codes should be written to `stream` (sys.stderr by default)."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    isatty = getattr(stream or sys.stderr, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, *codes: str) -> str:
    """Wrap `text` in the given codes; unchanged when no code is given."""
    if not codes:
        return text
    return _sgr(codes) + text + RESET


def make_style(*codes: str) -> tuple[str, str]:
    """Return the (prefix, suffix) pair surrounding a styled format string."""
    return (_sgr(codes), RESET)


class LogStyles:
    """Styles of the log levels that stand out."""

    WARNING = (YELLOW, DIM)
    ERROR = (RED, DIM)
    CRITICAL = (RED, BOLD)


class DispatchStyles:
    """Styles of the per-message dispatch trace, by outcome."""

    COMMAND = (YELLOW, BOLD)
    HELP = (CYAN, BOLD)
    UNKNOWN = (RED, DIM)


LEVEL_STYLES: dict[int, tuple[str, ...]] = {
    logging.WARNING: LogStyles.WARNING,
    logging.ERROR: LogStyles.ERROR,
    logging.CRITICAL: LogStyles.CRITICAL,
}
