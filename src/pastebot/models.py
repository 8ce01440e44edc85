"""Data models for the attachment upload pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from src.mclogs.models import InsightsResult, PasteResult


@dataclass(frozen=True)
class Attachment:
    """A file attached to an inbound chat message.

    ``size`` is the size declared by the platform, not the downloaded size.
    """

    url: str
    content_type: str
    size: int
    filename: str = ""


@dataclass
class InboundMessage:
    """Normalized inbound chat message for pipeline processing."""

    message_id: str
    channel_id: str
    author: str
    attachments: list[Attachment] = field(default_factory=list)


@dataclass(frozen=True)
class UploadOutcome:
    """A successfully pasted attachment, with insights when available."""

    attachment: Attachment
    paste: PasteResult
    insights: InsightsResult | None = None


@dataclass(frozen=True)
class ReplyField:
    title: str
    url: str


@dataclass
class Reply:
    """Platform-neutral rich reply sent back to the originating channel."""

    author_name: str
    author_url: str
    title: str
    description: str
    color: int
    timestamp: datetime
    fields: list[ReplyField] = field(default_factory=list)
    footer: str = ""
    author_icon_url: str | None = None
