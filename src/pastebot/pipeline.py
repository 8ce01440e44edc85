"""Attachment upload pipeline.

For each inbound message:
1. Select eligible attachments (plain text, at most five per message)
2. Signal "typing" on the channel, once
3. Per attachment, concurrently: download, enforce the size ceiling,
   paste, fetch insights
4. Assemble one reply from the successful uploads and send it

A failure in one attachment never affects its siblings; it is logged and
the attachment is left out of the reply.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import httpx

from src.errors import PasteBotError, SizeLimitExceeded, TransportError, UnsupportedContentType
from src.mclogs.models import InsightsResult, PasteResult
from src.pastebot.filters import is_plain_text, select_attachments
from src.pastebot.models import Attachment, InboundMessage, Reply, UploadOutcome
from src.pastebot.reply import build_reply

logger = logging.getLogger(__name__)

MAX_DOWNLOAD_SIZE = 10 * 1024 * 1024  # 10MiB
_DOWNLOAD_TIMEOUT_SECONDS = 10.0


class PasteService(Protocol):
    """The part of the mclo.gs client the pipeline depends on."""

    async def submit(self, content: str) -> PasteResult: ...

    async def fetch_insights(self, paste_id: str) -> InsightsResult: ...


class ReplyChannel(Protocol):
    """The originating channel of a message, as seen by the pipeline."""

    icon_url: str | None

    async def typing(self) -> None: ...

    async def send(self, reply: Reply) -> None: ...


class UploadPipeline:
    """Uploads the plain-text attachments of a message and replies with links."""

    def __init__(
        self,
        paste_service: PasteService,
        max_size: int = MAX_DOWNLOAD_SIZE,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._paste = paste_service
        self._max_size = max_size
        self._transport = transport

    async def handle(self, message: InboundMessage, channel: ReplyChannel) -> Reply | None:
        """Run the pipeline for one message and return the reply that was sent."""
        eligible = select_attachments(message.attachments)
        if not eligible:
            return None

        logger.info(
            "Processing %d attachment(s) from message %s (channel=%s author=%s)",
            len(eligible), message.message_id, message.channel_id, message.author,
        )
        await self._signal_typing(message, channel)

        results = await asyncio.gather(
            *(self._process(message, a) for a in eligible),
            return_exceptions=True,
        )

        outcomes: list[UploadOutcome] = []
        for attachment, result in zip(eligible, results):
            if isinstance(result, UploadOutcome):
                outcomes.append(result)
            elif isinstance(result, BaseException):
                logger.error(
                    "Unexpected error processing %s (message=%s channel=%s author=%s)",
                    attachment.url, message.message_id, message.channel_id, message.author,
                    exc_info=result,
                )

        reply = build_reply(outcomes, icon_url=channel.icon_url)
        if reply is None:
            logger.info("Nothing uploaded for message %s, not replying", message.message_id)
            return None

        try:
            await channel.send(reply)
        except PasteBotError as exc:
            logger.error(
                "Failed to deliver reply for message %s (channel=%s author=%s): %s",
                message.message_id, message.channel_id, message.author, exc,
            )
            return None
        return reply

    async def _signal_typing(self, message: InboundMessage, channel: ReplyChannel) -> None:
        try:
            await channel.typing()
        except PasteBotError as exc:
            logger.warning(
                "Could not start typing indicator in channel %s: %s", message.channel_id, exc,
            )

    async def _process(
        self, message: InboundMessage, attachment: Attachment,
    ) -> UploadOutcome | None:
        """Download, paste and analyse one attachment. None means it was dropped."""
        try:
            body = await self.download(attachment)
            paste = await self._paste.submit(body.decode("utf-8", errors="replace"))
        except PasteBotError as exc:
            logger.warning(
                "Dropping attachment %s (message=%s channel=%s author=%s): %s: %s",
                attachment.url, message.message_id, message.channel_id, message.author,
                type(exc).__name__, exc,
            )
            return None

        insights: InsightsResult | None = None
        try:
            insights = await self._paste.fetch_insights(paste.id)
        except PasteBotError as exc:
            logger.warning(
                "No insights for paste %s of %s (message=%s channel=%s author=%s): %s",
                paste.id, attachment.url, message.message_id, message.channel_id,
                message.author, exc,
            )

        return UploadOutcome(attachment=attachment, paste=paste, insights=insights)

    async def download(self, attachment: Attachment) -> bytes:
        """Download an attachment body.

        The size ceiling is checked against the declared size before the
        request and against the received bytes while streaming, so an
        oversized body is never fully read.
        """
        if attachment.size > self._max_size:
            raise SizeLimitExceeded(attachment.size, self._max_size)

        try:
            async with httpx.AsyncClient(
                verify=True,
                timeout=_DOWNLOAD_TIMEOUT_SECONDS,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                async with client.stream("GET", attachment.url) as resp:
                    resp.raise_for_status()

                    content_type = resp.headers.get("content-type")
                    if content_type and not is_plain_text(content_type):
                        raise UnsupportedContentType(
                            f"Downloaded content type is {content_type!r}"
                        )

                    body = bytearray()
                    async for chunk in resp.aiter_bytes():
                        body.extend(chunk)
                        if len(body) > self._max_size:
                            raise SizeLimitExceeded(len(body), self._max_size)
                    return bytes(body)
        except httpx.HTTPError as exc:
            raise TransportError(f"Download of {attachment.url} failed: {exc}") from exc
