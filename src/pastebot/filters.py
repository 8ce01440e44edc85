"""Selection of the attachments worth uploading."""

from __future__ import annotations

import logging
from typing import Sequence

from src.pastebot.models import Attachment

logger = logging.getLogger(__name__)

MAX_ATTACHMENTS = 5
PLAIN_TEXT_PREFIX = "text/plain"


def is_plain_text(content_type: str | None) -> bool:
    """Return True for ``text/plain`` with or without parameters (charset etc.)."""
    return (content_type or "").startswith(PLAIN_TEXT_PREFIX)


def select_attachments(attachments: Sequence[Attachment]) -> list[Attachment]:
    """Return the plain-text attachments of a message, in message order.

    Messages with no attachments, or with more than MAX_ATTACHMENTS, are
    ignored entirely.
    """
    if not attachments or len(attachments) > MAX_ATTACHMENTS:
        return []

    selected = [a for a in attachments if is_plain_text(a.content_type)]
    if len(selected) < len(attachments):
        logger.debug(
            "Ignoring %d non plain-text attachment(s)", len(attachments) - len(selected),
        )
    return selected
