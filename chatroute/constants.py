"""Shared constants for chatroute."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "CONFIG_SECTION",
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_INVALID_COMMAND_ERROR",
    "DEFAULT_QUIT_WORD",
    "DEFAULT_TOKEN_ENV",
    "DEFAULT_TRANSPORT",
    "EXTENSIONS_PACKAGE",
    "GLOBAL_HELP_TOKEN",
    "COMMAND_HELP_TOKEN",
    "TRANSPORTS",
]

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "chatroute" / "config.toml"

# Name of the TOML table holding the router options
CONFIG_SECTION = "chatroute"

DEFAULT_INVALID_COMMAND_ERROR = "I've checked my data banks and could not find record of that command. Maybe you should check yours?"
DEFAULT_ERROR_MESSAGE = "Unexpected error completing your request. Check console for error log."

GLOBAL_HELP_TOKEN = "help"
COMMAND_HELP_TOKEN = "--help"

DEFAULT_QUIT_WORD = "quit"

# Short extension names are looked up in this package
EXTENSIONS_PACKAGE = "chatroute.extensions"

# Channels the CLI can serve
TRANSPORTS = ("console", "discord")
DEFAULT_TRANSPORT = "console"

# Environment variable holding the Discord bot token
DEFAULT_TOKEN_ENV = "DISCORD_LOGIN"
