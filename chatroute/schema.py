"""Schema of the `[chatroute]` configuration section."""

from .constants import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_INVALID_COMMAND_ERROR,
    DEFAULT_QUIT_WORD,
    DEFAULT_TOKEN_ENV,
    DEFAULT_TRANSPORT,
    TRANSPORTS,
)
from .validation import ConfigField, ConfigItems

__all__ = ["ROUTER_CONFIG_SCHEMA"]


def _validate_prefix(value: str) -> list[str]:
    """A prefix must be glued to the command name, so it can't hold spaces."""
    if not value:
        return ["Prefix can't be empty"]
    if any(char.isspace() for char in value):
        return [f"Prefix {value!r} can't contain whitespace"]
    return []


def _validate_transport(value: str) -> list[str]:
    if value not in TRANSPORTS:
        return [f"Unknown transport {value!r}, use one of {', '.join(TRANSPORTS)}"]
    return []


ROUTER_CONFIG_SCHEMA = ConfigItems(
    ConfigField("prefix", str, required=True, description="Text leading every command", validator=_validate_prefix),
    ConfigField(
        "invalid_command_error",
        str,
        default=DEFAULT_INVALID_COMMAND_ERROR,
        description="Reply to unknown commands",
    ),
    ConfigField("error_message", str, default=DEFAULT_ERROR_MESSAGE, description="Reply when a command fails"),
    ConfigField("extensions", list, default=[], description="Modules exposing setup(router)"),
    ConfigField("extensions_paths", list, default=[], description="Folders added to the import path"),
    ConfigField("include", list, default=[], description="Extra configuration files to merge"),
    ConfigField("colored_handlers_log", bool, default=True, description="Colored dispatch trace in debug mode"),
    ConfigField(
        "transport",
        str,
        default=DEFAULT_TRANSPORT,
        description="Channel served by the command line: console or discord",
        validator=_validate_transport,
    ),
    ConfigField("token_env", str, default=DEFAULT_TOKEN_ENV, description="Environment variable holding the Discord token"),
    ConfigField("quit_word", str, default=DEFAULT_QUIT_WORD, description="Console input leaving the session"),
)
