"""A few everyday commands: ping, echo and a shared counter."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..commands.models import CommandDescriptor

if TYPE_CHECKING:
    from ..commands.models import Request
    from ..router import Router

__all__ = ["setup"]

COUNT_KEY = "count"


async def ping(request: Request, router: Router) -> None:  # noqa: ARG001
    """Reply "Pong!", quoting the arguments if any."""
    if request.args:
        quoted = " ".join(f"`{arg}`" for arg in request.args)
        await request.message.reply(f"Pong! (with args: {quoted})")
    else:
        await request.message.reply("Pong!")


async def echo(request: Request, router: Router) -> None:  # noqa: ARG001
    """Reply with the text following the command."""
    await request.message.reply(request.rest or "...")


async def count(request: Request, router: Router) -> None:
    value = (router.state or {}).get(COUNT_KEY, 0) + 1
    router.set_state({COUNT_KEY: value})
    await request.message.reply(f"Count is now {value}")


async def count_reset(request: Request, router: Router) -> None:
    router.set_state({COUNT_KEY: 0})
    await request.message.reply("Count reset")


def count_help(router: Router) -> str:
    """Help text showing the current value."""
    value = (router.state or {}).get(COUNT_KEY, 0)
    return f"Adds one to a shared counter (currently {value}). `{router.prefix}count reset` sets it back to 0."


def log_count_change(previous: Mapping[str, Any] | None, current: Mapping[str, Any], router: Router) -> None:
    before = (previous or {}).get(COUNT_KEY)
    after = current.get(COUNT_KEY)
    if before != after:
        router.log.info("count changed: %s -> %s", before, after)


def setup(router: Router) -> None:
    """Register the commands on `router`."""
    router.register("ping", ping, 'Responds with "Pong!" as well as returning any additional arguments.')
    router.register("echo", echo, "Echoes back what you say")
    router.register(
        CommandDescriptor(
            "count",
            count,
            help=count_help,
            children=[CommandDescriptor("reset", count_reset, help="Sets the counter back to 0")],
        )
    )
    router.on_state_update(log_count_change)
