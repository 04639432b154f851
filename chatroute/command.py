"""Chatroute - route prefixed chat commands (console or Discord runner)."""

import asyncio
import logging
import os
import sys
from collections.abc import Awaitable, Callable
from functools import partial

from .channels.base import BaseChannel
from .channels.console import ConsoleChannel
from .config import Configuration
from .config_loader import ConfigLoader
from .constants import DEFAULT_QUIT_WORD, DEFAULT_TOKEN_ENV, DEFAULT_TRANSPORT
from .extensions import load_extensions
from .logging_setup import get_logger, init_logger
from .models import ConfigError, ExitCode
from .router import Router

__all__: list[str] = ["main"]

USAGE = """Syntax: chatroute [--config PATH] [--debug LOGFILE]

Options:
  --config PATH     configuration file or folder (default: ~/.config/chatroute/config.toml)
  --debug LOGFILE   enable debug logs, also written to LOGFILE

The `transport` option of the configuration selects the console (default) or Discord.
"""


def use_param(txt: str, argv: list[str] | None = None) -> str:
    """Check if parameter `txt` is in argv (sys.argv by default).

    if found, removes it from argv & returns the argument value

    Raises:
        ValueError: if the parameter has no value
    """
    if argv is None:
        argv = sys.argv
    v = ""
    if txt in argv:
        i = argv.index(txt)
        if i + 1 >= len(argv):
            msg = f"{txt} expects a value"
            raise ValueError(msg)
        v = argv[i + 1]
        del argv[i : i + 2]
    return v


def _open_channel(
    router: Router, config: Configuration, log: logging.Logger
) -> tuple[BaseChannel, Callable[[], Awaitable[None]]]:
    """Build the channel selected by the `transport` option.

    Returns:
        The channel and the coroutine function serving it until it's closed

    Raises:
        ConfigError: if the Discord token or the `discord` extra is missing
    """
    if config.get_str("transport", DEFAULT_TRANSPORT) != "discord":
        console = ConsoleChannel(quit_word=config.get_str("quit_word", DEFAULT_QUIT_WORD), prefix=router.prefix)
        return console, console.run

    token_env = config.get_str("token_env", DEFAULT_TOKEN_ENV)
    token = os.environ.get(token_env)
    if not token:
        log.critical("The discord transport needs a bot token in $%s", token_env)
        msg = f"{token_env} is not set"
        raise ConfigError(msg)
    try:
        from .channels.discord_client import DiscordChannel  # noqa: PLC0415
    except ModuleNotFoundError as e:
        log.critical("The discord transport needs the `discord` extra: pip install chatroute[discord]")
        raise ConfigError(str(e)) from e
    discord_channel = DiscordChannel()
    return discord_channel, partial(discord_channel.start, token)


async def run(config_filename: str = "") -> ExitCode:
    """Load the configuration and serve the configured channel until it closes.

    Raises:
        ConfigError: if the configuration or an extension can't be loaded
    """
    log = get_logger()
    loader = ConfigLoader(log)
    await loader.load(config_filename)
    config = loader.section()

    router = Router.from_config(config)
    await load_extensions(router, config.get_list("extensions"), config.get_list("extensions_paths"))

    channel, serve = _open_channel(router, config, log)
    router.listen(channel)
    try:
        await serve()
    finally:
        await router.close()
        await router.wait_state_listeners()
    return ExitCode.SUCCESS


def main() -> None:
    """Run the command."""
    argv = sys.argv[1:]
    if "--help" in argv or "-h" in argv:
        print(USAGE)
        sys.exit(ExitCode.SUCCESS)
    try:
        debug_flag = use_param("--debug", argv)
        config_override = use_param("--config", argv)
    except ValueError as e:
        print(f"{e}\n\n{USAGE}", file=sys.stderr)
        sys.exit(ExitCode.USAGE_ERROR)

    if debug_flag:
        init_logger(filename=debug_flag, force_debug=True)
    else:
        init_logger()
    log = get_logger("startup")

    if argv:
        log.critical("Unknown arguments: %s", " ".join(argv))
        print(USAGE, file=sys.stderr)
        sys.exit(ExitCode.USAGE_ERROR)

    try:
        code = asyncio.run(run(config_override))
    except KeyboardInterrupt:
        code = ExitCode.SUCCESS
    except ConfigError:
        log.critical("Configuration failed.")
        code = ExitCode.CONFIG_ERROR
    except Exception:  # pylint: disable=W0718
        log.critical("Unhandled exception:", exc_info=True)
        code = ExitCode.RUNTIME_ERROR
    sys.exit(code)


if __name__ == "__main__":
    main()
