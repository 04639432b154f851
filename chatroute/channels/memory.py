"""In-process channel, for embedding the router or driving it from tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .base import BaseChannel

if TYPE_CHECKING:
    from ..models import ReplyPayload

__all__ = ["MemoryChannel", "MemoryMessage"]


@dataclass
class MemoryMessage:
    """A message delivered by a MemoryChannel; replies are kept in order."""

    text: str
    from_bot: bool = False
    channel: MemoryChannel | None = field(default=None, repr=False)
    replies: list[ReplyPayload] = field(default_factory=list)

    async def reply(self, payload: ReplyPayload) -> ReplyPayload:
        """Record `payload` on the message and on its channel."""
        self.replies.append(payload)
        if self.channel is not None:
            self.channel.replies.append((self, payload))
        return payload


class MemoryChannel(BaseChannel):
    """Delivers messages sent through `send` to the listeners."""

    def __init__(self) -> None:
        super().__init__("memory")
        self.replies: list[tuple[MemoryMessage, ReplyPayload]] = []

    async def send(self, text: str, from_bot: bool = False) -> MemoryMessage:
        """Deliver a message and wait until every listener is done with it.

        Args:
            text: The message text
            from_bot: Whether the sender is an automated account

        Returns:
            The delivered message, holding its replies
        """
        if self.closed:
            msg = "channel is closed"
            raise RuntimeError(msg)
        message = MemoryMessage(text=text, from_bot=from_bot, channel=self)
        await self.emit(message)
        return message
