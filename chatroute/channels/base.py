"""Message and channel interfaces shared by every transport."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..logging_setup import get_logger

if TYPE_CHECKING:
    from ..models import ReplyPayload

__all__ = ["BaseChannel", "Message", "MessageCallback", "MessageChannel"]


@runtime_checkable
class Message(Protocol):
    """An incoming chat message."""

    text: str
    from_bot: bool

    async def reply(self, payload: ReplyPayload) -> Any:  # noqa: ANN401
        """Answer the message."""


MessageCallback = Callable[[Message], Awaitable[Any]]


@runtime_checkable
class MessageChannel(Protocol):
    """A transport delivering messages to registered callbacks."""

    def add_listener(self, callback: MessageCallback) -> None:
        """Call `callback` for every incoming message."""

    def remove_listener(self, callback: MessageCallback) -> None:
        """Stop calling `callback`."""

    async def close(self) -> None:
        """Release the transport."""


class BaseChannel:
    """Listener bookkeeping for concrete channels."""

    def __init__(self, name: str = "channel") -> None:
        self.name = name
        self.log = get_logger(name)
        self._listeners: list[MessageCallback] = []
        self.closed = False

    def add_listener(self, callback: MessageCallback) -> None:
        """Call `callback` for every incoming message."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: MessageCallback) -> None:
        """Stop calling `callback` (no-op if it is not registered)."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    @property
    def listeners(self) -> list[MessageCallback]:
        """The registered callbacks, in registration order."""
        return list(self._listeners)

    async def emit(self, message: Message) -> None:
        """Deliver `message` to every listener concurrently.

        A failing listener is logged and does not prevent delivery to the
        others.
        """
        results = await asyncio.gather(*(callback(message) for callback in list(self._listeners)), return_exceptions=True)
        for result in results:
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                self.log.error("Listener failed on %r", message.text, exc_info=result)

    async def close(self) -> None:
        """Drop every listener and mark the channel closed."""
        self._listeners.clear()
        self.closed = True
