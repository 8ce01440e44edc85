"""Discord gateway glue.

Translates discord.py message events into InboundMessage objects, runs the
upload pipeline, and renders the resulting Reply as an embed.
"""

from __future__ import annotations

import logging

import discord

from src.errors import TransportError
from src.pastebot.models import Attachment, InboundMessage, Reply
from src.pastebot.pipeline import UploadPipeline

logger = logging.getLogger(__name__)

_AVATAR_SIZE = 32


def to_inbound(message: discord.Message) -> InboundMessage:
    """Extract ids, author and attachment metadata from a Discord message."""
    return InboundMessage(
        message_id=str(message.id),
        channel_id=str(message.channel.id),
        author=str(message.author),
        attachments=[
            Attachment(
                url=a.url,
                content_type=a.content_type or "",
                size=a.size,
                filename=a.filename,
            )
            for a in message.attachments
        ],
    )


def to_embed(reply: Reply) -> discord.Embed:
    embed = discord.Embed(
        title=reply.title,
        description=reply.description,
        colour=reply.color,
        timestamp=reply.timestamp,
    )
    embed.set_author(name=reply.author_name, url=reply.author_url, icon_url=reply.author_icon_url)
    for f in reply.fields:
        embed.add_field(name=f.title, value=f.url, inline=False)
    if reply.footer:
        embed.set_footer(text=reply.footer)
    return embed


class DiscordChannel:
    """Adapts a Discord channel to the pipeline's ReplyChannel interface."""

    def __init__(self, channel: discord.abc.Messageable, icon_url: str | None = None) -> None:
        self._channel = channel
        self.icon_url = icon_url

    async def typing(self) -> None:
        try:
            await self._channel.typing()
        except discord.HTTPException as exc:
            raise TransportError(f"Typing indicator failed: {exc}") from exc

    async def send(self, reply: Reply) -> None:
        try:
            await self._channel.send(embed=to_embed(reply))
        except discord.HTTPException as exc:
            raise TransportError(f"Sending reply failed: {exc}") from exc


class PasteBot(discord.Client):
    """Discord client that uploads plain-text attachments to mclo.gs."""

    def __init__(self, pipeline: UploadPipeline, **options) -> None:
        intents = discord.Intents.default()
        # Attachments are part of the privileged message content
        intents.message_content = True
        super().__init__(intents=intents, **options)
        self._pipeline = pipeline

    async def on_ready(self) -> None:
        logger.info("Logged in as %s", self.user)

    async def on_message(self, message: discord.Message) -> None:
        if self.user is not None and message.author.id == self.user.id:
            return
        if not message.attachments:
            return

        await self._pipeline.handle(
            to_inbound(message), DiscordChannel(message.channel, self._icon_url()),
        )

    def _icon_url(self) -> str | None:
        if self.user is None:
            return None
        return self.user.display_avatar.replace(size=_AVATAR_SIZE).url
