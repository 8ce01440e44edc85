"""Builds the summary reply for a processed message."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from src.pastebot.models import Reply, ReplyField, UploadOutcome

SERVICE_NAME = "mclo.gs"
SERVICE_URL = "https://mclo.gs/"
ACCENT_COLOR = 0x2D3943
FALLBACK_TITLE = "Log"
FOOTER = "Logs hosted by mclo.gs | Powered by aternos.org"
# embed footers do not render markdown, so the links go in the description
ATTRIBUTION = "Hosted by [mclo.gs](https://mclo.gs/), a service by [Aternos](https://aternos.org/)"


def field_for(outcome: UploadOutcome) -> ReplyField:
    """One title/link pair; the title falls back when insights are missing."""
    title = outcome.insights.title if outcome.insights and outcome.insights.title else FALLBACK_TITLE
    return ReplyField(title=title, url=outcome.paste.url)


def _summary(count: int) -> str:
    noun = "file" if count == 1 else "files"
    return f"Uploaded {count} {noun} to {SERVICE_NAME} for easier reading.\n{ATTRIBUTION}"


def build_reply(
    outcomes: Sequence[UploadOutcome],
    icon_url: str | None = None,
    now: datetime | None = None,
) -> Reply | None:
    """Return the reply for ``outcomes``, or None when nothing was uploaded."""
    if not outcomes:
        return None

    return Reply(
        author_name=SERVICE_NAME,
        author_url=SERVICE_URL,
        author_icon_url=icon_url,
        title="Your logs were uploaded",
        description=_summary(len(outcomes)),
        color=ACCENT_COLOR,
        timestamp=now or datetime.now(tz=timezone.utc),
        fields=[field_for(o) for o in outcomes],
        footer=FOOTER,
    )
