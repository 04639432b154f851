"""Errors, exit codes and reply payloads shared across chatroute."""

from dataclasses import dataclass, field
from enum import IntEnum

__all__ = [
    "ChatrouteError",
    "ConfigError",
    "ExitCode",
    "HandlerError",
    "ReplyPayload",
    "RichReply",
    "StructuralError",
]


class ChatrouteError(Exception):
    """Base class for chatroute errors."""


class StructuralError(ChatrouteError):
    """A command path could not be followed in the command tree.

    Raised to the caller of `register` / `set_help`, never caught internally.
    """

    def __init__(self, path: list[str] | tuple[str, ...], reason: str = "unable to follow command path") -> None:
        self.path = tuple(path)
        super().__init__(f"{reason}: {' '.join(self.path)!r}")


class HandlerError(ChatrouteError):
    """Wraps an exception raised by a command handler or a dynamic help.

    The original exception is available as `__cause__`.
    """

    def __init__(self, path: tuple[str, ...], stage: str = "handler") -> None:
        self.path = path
        self.stage = stage
        super().__init__(f"{stage} of {' '.join(path) or '<root>'!r} failed")


class ConfigError(ChatrouteError):
    """Used for configuration errors which already triggered logging."""


class ExitCode(IntEnum):
    """Exit codes of the chatroute CLI."""

    SUCCESS = 0
    USAGE_ERROR = 1
    CONFIG_ERROR = 2
    RUNTIME_ERROR = 3


@dataclass
class RichReply:
    """A structured reply: a title and ordered (name, value) fields.

    Channels decide how to render it.
    """

    title: str
    fields: list[tuple[str, str]] = field(default_factory=list)

    def to_text(self) -> str:
        """Render as plain text."""
        lines = [self.title]
        for name, value in self.fields:
            lines.append("")
            lines.append(f"{name}:")
            lines.append(value)
        return "\n".join(lines)


ReplyPayload = str | RichReply
