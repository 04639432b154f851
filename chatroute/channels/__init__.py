"""Message transports.

`DiscordChannel` lives in `chatroute.channels.discord_client` and needs the
`discord` extra.
"""

from .base import BaseChannel, Message, MessageCallback, MessageChannel
from .console import ConsoleChannel, ConsoleMessage
from .memory import MemoryChannel, MemoryMessage

__all__ = [
    "BaseChannel",
    "ConsoleChannel",
    "ConsoleMessage",
    "MemoryChannel",
    "MemoryMessage",
    "Message",
    "MessageCallback",
    "MessageChannel",
]
