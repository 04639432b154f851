"""Interactive terminal channel, one line per message."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import questionary

from ..constants import DEFAULT_QUIT_WORD
from ..models import RichReply
from .base import BaseChannel

if TYPE_CHECKING:
    from ..models import ReplyPayload

__all__ = ["ConsoleChannel", "ConsoleMessage", "render_payload"]


def render_payload(payload: ReplyPayload) -> str:
    """Turn a reply payload into printable text."""
    if isinstance(payload, RichReply):
        return payload.to_text()
    return str(payload)


@dataclass
class ConsoleMessage:
    """A line typed in the terminal."""

    text: str
    channel: ConsoleChannel = field(repr=False)
    from_bot: bool = False

    async def reply(self, payload: ReplyPayload) -> None:
        """Print the reply below the prompt."""
        self.channel.print(render_payload(payload))


class ConsoleChannel(BaseChannel):
    """Reads messages with a questionary prompt and prints the replies."""

    def __init__(
        self,
        prompt: str = ">",
        quit_word: str = DEFAULT_QUIT_WORD,
        reply_style: str = "fg:cyan",
        prefix: str | None = None,
    ) -> None:
        super().__init__("console")
        self.prompt = prompt
        self.prefix = prefix
        self.quit_word = quit_word
        self.reply_style = reply_style

    def print(self, text: str) -> None:
        """Print `text` with the reply style."""
        questionary.print(text, style=self.reply_style)

    async def read(self) -> str | None:
        """Prompt for one line; None on Ctrl-C or Ctrl-D."""
        try:
            return await questionary.text(self.prompt, qmark="").ask_async()
        except EOFError:
            return None

    async def run(self) -> None:
        """Deliver typed lines until the user quits, then close the channel."""
        if self.prefix:
            self.print(f"Commands start with {self.prefix!r}, try {self.prefix}help.")
        self.print(f"Type {self.quit_word!r} to leave.")
        while not self.closed:
            text = await self.read()
            if text is None or text.strip() == self.quit_word:
                break
            if not text.strip():
                continue
            await self.emit(ConsoleMessage(text=text, channel=self))
        await self.close()
