"""Data models for command handling."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..models import ReplyPayload

if TYPE_CHECKING:
    from ..channels.base import Message
    from ..router import Router

__all__ = ["CommandDescriptor", "CommandNode", "Handler", "Help", "HelpFactory", "Request", "Walk"]

Handler = Callable[["Request", "Router"], Awaitable[Any] | None]
HelpFactory = Callable[["Router"], ReplyPayload | Awaitable[ReplyPayload]]
# Either a static payload or a factory called with the router when help is served
Help = ReplyPayload | HelpFactory


@dataclass
class CommandNode:
    """A registered command or subcommand.

    A node always has a handler; `children` maps the next path segment to
    the subcommand node.
    """

    name: str  # The segment name (e.g., "ping" or "sound")
    path: tuple[str, ...]  # Full path from the root (e.g., ("ping", "sound"))
    handler: Handler
    help: Help | None = None
    children: dict[str, CommandNode] = field(default_factory=dict)


@dataclass
class CommandDescriptor:
    """Batch registration of a command with its help and subcommands.

    `command` is a full path for the top-level descriptor; nested
    descriptors in `children` name a single segment.
    """

    command: str
    handler: Handler
    help: Help | None = None
    children: list[CommandDescriptor] = field(default_factory=list)


@dataclass(frozen=True)
class Walk:
    """Result of a permissive walk: the consumed segments and the deepest node."""

    through: tuple[str, ...] = ()
    command: CommandNode | None = None


@dataclass(frozen=True)
class Request:
    """Everything a handler needs to know about the message it serves."""

    message: Message
    components: tuple[str, ...]  # every token after the prefix
    through: tuple[str, ...]  # tokens consumed to resolve the command
    command: CommandNode | None
    args: tuple[str, ...]  # tokens left after the command path
    rest: str  # original text without prefix and command path
