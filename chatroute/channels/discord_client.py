"""Discord transport, available with the `discord` extra."""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from ..models import RichReply
from .base import BaseChannel

if TYPE_CHECKING:
    from ..models import ReplyPayload

__all__ = ["DiscordChannel", "DiscordMessage", "to_embed"]


def to_embed(reply: RichReply) -> discord.Embed:
    """Build a Discord embed from a rich reply."""
    embed = discord.Embed(title=reply.title)
    for name, value in reply.fields:
        embed.add_field(name=name, value=value, inline=False)
    return embed


class DiscordMessage:
    """Exposes a `discord.Message` to the router."""

    def __init__(self, message: discord.Message) -> None:
        self.raw = message
        self.text = message.content
        self.from_bot = message.author.bot

    async def reply(self, payload: ReplyPayload) -> discord.Message:
        """Reply in the channel of the message, as an embed for rich replies."""
        if isinstance(payload, RichReply):
            return await self.raw.reply(embed=to_embed(payload))
        return await self.raw.reply(payload)


class DiscordChannel(BaseChannel):
    """Delivers the messages received by a discord client."""

    def __init__(self, client: discord.Client | None = None) -> None:
        super().__init__("discord")
        if client is None:
            intents = discord.Intents.default()
            intents.message_content = True
            client = discord.Client(intents=intents)
        self.client = client

        @client.event
        async def on_message(message: discord.Message) -> None:
            await self.emit(DiscordMessage(message))

    async def start(self, token: str) -> None:
        """Log in and process events until the client is closed."""
        self.log.info("Connecting to Discord")
        await self.client.start(token)

    async def close(self) -> None:
        """Disconnect the client and drop the listeners."""
        await super().close()
        await self.client.close()
