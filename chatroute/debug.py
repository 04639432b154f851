"""Process-wide debug switch, initially on when DEBUG is set in the environment."""

import os

__all__ = ["is_debug", "set_debug"]

_flags = {"debug": bool(os.environ.get("DEBUG"))}


def is_debug() -> bool:
    """Tell whether debug mode is on."""
    return _flags["debug"]


def set_debug(value: bool) -> None:
    """Turn debug mode on or off; loggers created afterwards follow it."""
    _flags["debug"] = value
