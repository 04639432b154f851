"""Chatroute router - the message dispatcher."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Self

from .ansi import DispatchStyles, colorize
from .commands.models import CommandDescriptor, CommandNode, Handler, Help, Request, Walk
from .commands.tree import CommandTree
from .constants import COMMAND_HELP_TOKEN, DEFAULT_ERROR_MESSAGE, DEFAULT_INVALID_COMMAND_ERROR, GLOBAL_HELP_TOKEN
from .help import get_help, resolve_command_help
from .logging_setup import get_logger
from .models import HandlerError
from .parsing import parse_components, strip_consumed
from .state import StateContainer, StateListener

if TYPE_CHECKING:
    import logging

    from .channels.base import Message, MessageChannel
    from .config import Configuration

__all__: list[str] = ["Router"]


class Router:  # pylint: disable=too-many-instance-attributes
    """Routes prefixed chat messages to registered command handlers.

    Handlers are called as `handler(request, router)`, dynamic helps as
    `help(router)` and state listeners as `listener(previous, next, router)`.
    Any of them may be a coroutine function.
    """

    prefix: str
    invalid_command_error: str
    error_message: str
    commands: CommandTree
    channel: MessageChannel | None = None
    log_handler: Callable[[str, Request], None]

    def __init__(
        self,
        prefix: str,
        invalid_command_error: str = DEFAULT_INVALID_COMMAND_ERROR,
        error_message: str = DEFAULT_ERROR_MESSAGE,
        *,
        colored_handlers_log: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        """Create a router.

        Args:
            prefix: Non-empty text leading every command
            invalid_command_error: Reply to unknown commands
            error_message: Reply when a handler or a dynamic help fails
            colored_handlers_log: Use colors in the dispatch debug trace
            logger: Logger to use instead of the "chatroute" one
        """
        if not isinstance(prefix, str) or not prefix:
            msg = f"prefix must be a non-empty string, got {prefix!r}"
            raise ValueError(msg)
        self.prefix = prefix
        self.invalid_command_error = invalid_command_error
        self.error_message = error_message
        self.log = logger or get_logger()
        self.commands = CommandTree(self.log)
        self._state = StateContainer(self, self.log)
        self.log_handler = self.colored_log_handler if colored_handlers_log else self.plain_log_handler

    @classmethod
    def from_config(cls, config: Configuration) -> Self:
        """Create a router from the validated `[chatroute]` configuration section."""
        return cls(
            config.get_str("prefix"),
            invalid_command_error=config.get_str("invalid_command_error", DEFAULT_INVALID_COMMAND_ERROR),
            error_message=config.get_str("error_message", DEFAULT_ERROR_MESSAGE),
            colored_handlers_log=config.get_bool("colored_handlers_log", default=True),
            logger=config.log,
        )

    # State

    @property
    def state(self) -> dict[str, Any] | None:
        """The current state (None until the first `set_state`)."""
        return self._state.value

    @property
    def state_listeners(self) -> list[StateListener]:
        """Registered state listeners, in call order."""
        return self._state.listeners

    def set_state(self, partial: Mapping[str, Any] | None = None) -> Self:
        """Shallow-merge `partial` into the state and notify every listener."""
        self._state.update(partial)
        return self

    def on_state_update(self, listener: StateListener) -> Self:
        """Call `listener(previous, next, router)` after every `set_state`."""
        self._state.subscribe(listener)
        return self

    async def wait_state_listeners(self) -> None:
        """Wait for asynchronous state listeners still running."""
        await self._state.drain()

    # Commands

    def parse(self, text: str) -> list[str]:
        """Tokenize `text`, returning [] unless it is addressed to this router."""
        return parse_components(text, self.prefix)

    def register(
        self,
        command: str | CommandDescriptor,
        handler: Handler | None = None,
        help: Help | None = None,  # noqa: A002
    ) -> Self:
        """Register a command.

        Either `register("path to cmd", handler, help=None)` or
        `register(CommandDescriptor(...))` to attach subcommands at once.

        Raises:
            StructuralError: if the parent command path is not registered
        """
        if isinstance(command, CommandDescriptor):
            self.commands.add(command)
        else:
            if handler is None:
                msg = f"no handler given for {command!r}"
                raise TypeError(msg)
            self.commands.register(command, handler, help)
        return self

    def command(self, path: str, help: Help | None = None) -> Callable[[Handler], Handler]:  # noqa: A002
        """Decorator registering the decorated function under `path`."""

        def _decorator(handler: Handler) -> Handler:
            self.register(path, handler, help)
            return handler

        return _decorator

    def set_help(self, path: str, help: Help) -> Self:  # noqa: A002
        """Attach help to an existing command.

        Raises:
            StructuralError: if the command does not exist
        """
        self.commands.set_help(path, help)
        return self

    def strict_walk(self, segments: Sequence[str]) -> CommandNode:
        """Resolve every segment of a command path (see `CommandTree.strict_walk`)."""
        return self.commands.strict_walk(segments)

    def permissive_walk(self, segments: Sequence[str]) -> Walk:
        """Follow tokens as deep as possible (see `CommandTree.permissive_walk`)."""
        return self.commands.permissive_walk(segments)

    # Dispatch

    def plain_log_handler(self, kind: str, request: Request) -> None:
        """Log a dispatch without color.

        Args:
            kind: "command", "help" or "unknown"
            request: The request being served
        """
        self.log.debug("%s %s%s", kind, " ".join(request.through), request.args)

    def colored_log_handler(self, kind: str, request: Request) -> None:
        """Log a dispatch with color.

        Args:
            kind: "command", "help" or "unknown"
            request: The request being served
        """
        style = getattr(DispatchStyles, kind.upper(), DispatchStyles.COMMAND)
        self.log.debug(colorize(f"{kind} {' '.join(request.through)}{request.args}", *style))

    def build_request(self, message: Message, components: Sequence[str]) -> Request:
        """Resolve `components` and describe the result as a Request."""
        walk = self.commands.permissive_walk(components)
        return Request(
            message=message,
            components=tuple(components),
            through=walk.through,
            command=walk.command,
            args=tuple(components[len(walk.through) :]),
            rest=strip_consumed(message.text, self.prefix, walk.through),
        )

    async def dispatch(self, message: Message) -> bool:
        """Handle an incoming message.

        Args:
            message: The message to serve

        Returns:
            False if the message is not for this router (sent by a bot, or not
            a command), True once it was handled, whatever the outcome.
        """
        if message.from_bot:
            return False
        components = self.parse(message.text)
        if not components:
            return False
        request = self.build_request(message, components)
        command = request.command

        if len(request.args) == 1 and (
            (command is None and request.args[0] == GLOBAL_HELP_TOKEN)
            or (command is not None and request.args[0] == COMMAND_HELP_TOKEN and command.help is not None)
        ):
            self.log_handler("help", request)
            await self.on_help(request)
        elif command is None:
            self.log_handler("unknown", request)
            await self.on_invalid_command(request)
        else:
            self.log_handler("command", request)
            await self._run_handler(command, request)
        return True

    async def _run_handler(self, command: CommandNode, request: Request) -> None:
        """Invoke the command handler, containing any failure."""
        try:
            result = command.handler(request, self)
            if inspect.isawaitable(result):
                await result
        except Exception as e:  # pylint: disable=W0718
            self.log.exception("%s%s failed:", " ".join(command.path), request.args)
            error = HandlerError(command.path)
            error.__cause__ = e
            await self.on_error(error, request)

    async def on_help(self, request: Request) -> None:
        """Reply with the global help, or with the help of the resolved command."""
        if request.command is None:
            await request.message.reply(get_help(self))
            return
        try:
            payload = await resolve_command_help(self, request.command)
        except Exception as e:  # pylint: disable=W0718
            self.log.exception("help of %s failed:", " ".join(request.command.path))
            error = HandlerError(request.command.path, stage="help")
            error.__cause__ = e
            await self.on_error(error, request)
            return
        await request.message.reply(payload)

    async def on_error(self, error: HandlerError, request: Request) -> None:  # noqa: ARG002
        """Answer a request whose handler (or help) failed."""
        await request.message.reply(self.error_message)

    async def on_invalid_command(self, request: Request) -> None:
        """Answer a request that matched no command."""
        await request.message.reply(self.invalid_command_error)

    # Channel

    async def _on_message(self, message: Message) -> None:
        """Channel callback: dispatch, logging failures of the reply itself."""
        try:
            await self.dispatch(message)
        except Exception:  # pylint: disable=W0718
            self.log.exception("Unhandled error while dispatching %r", message.text)

    def listen(self, channel: MessageChannel) -> Self:
        """Dispatch every message delivered by `channel`."""
        if self.channel is not None and self.channel is not channel:
            self.channel.remove_listener(self._on_message)
        self.channel = channel
        channel.add_listener(self._on_message)
        return self

    async def close(self) -> Self:
        """Stop listening and release the channel."""
        channel = self.channel
        if channel is not None:
            channel.remove_listener(self._on_message)
            self.channel = None
            await channel.close()
        return self
