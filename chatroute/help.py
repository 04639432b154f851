"""Help payloads served by the router."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING

from .constants import GLOBAL_HELP_TOKEN
from .models import ReplyPayload, RichReply

if TYPE_CHECKING:
    from .commands.models import CommandNode
    from .router import Router

__all__ = ["get_help", "list_commands", "resolve_command_help"]


def list_commands(router: Router) -> list[str]:
    """Return the top-level command names plus the help pseudo-command, sorted."""
    return sorted([*router.commands.names(), GLOBAL_HELP_TOKEN])


def get_help(router: Router) -> RichReply:
    """Build the global help listing.

    Args:
        router: The router whose commands are listed

    Returns:
        A RichReply with the command list and per-command help syntax
    """
    commands = "\n".join(f"- `{name}`" for name in list_commands(router))
    return RichReply(
        title="Help",
        fields=[
            ("Commands", commands),
            ("Help with commands", f"You can get help with commands and sub-commands by running `{router.prefix}command --help`"),
        ],
    )


async def resolve_command_help(router: Router, command: CommandNode) -> ReplyPayload:
    """Return the help payload of `command`.

    Static payloads are returned as is; callables are called with the router
    and awaited when needed. Exceptions are left to the caller.
    """
    help_ = command.help
    if not callable(help_):
        assert help_ is not None
        return help_
    payload = help_(router)
    if inspect.isawaitable(payload):
        payload = await payload
    return payload
