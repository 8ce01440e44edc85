"""Tests for reply assembly."""

from __future__ import annotations

from datetime import datetime, timezone

from src.mclogs.models import Analysis, InsightsResult, PasteResult
from src.pastebot.models import Attachment, ReplyField, UploadOutcome
from src.pastebot.reply import ACCENT_COLOR, FALLBACK_TITLE, SERVICE_NAME, build_reply


def _outcome(paste_id: str, title: str | None = None) -> UploadOutcome:
    insights = None
    if title is not None:
        insights = InsightsResult(
            id="x", name="Vanilla", type="Server Log", version="1.20.1",
            title=title, analysis=Analysis(),
        )
    return UploadOutcome(
        attachment=Attachment(url=f"https://cdn.test/{paste_id}.log", content_type="text/plain", size=1),
        paste=PasteResult(id=paste_id, url=f"https://mclo.gs/{paste_id}", raw_url=""),
        insights=insights,
    )


class TestBuildReply:
    def test_no_outcomes_means_no_reply(self) -> None:
        assert build_reply([]) is None

    def test_one_field_per_outcome(self) -> None:
        reply = build_reply([_outcome("abc", "Vanilla 1.20.1 Server Log"), _outcome("def", "Forge Log")])

        assert reply is not None
        assert reply.fields == [
            ReplyField(title="Vanilla 1.20.1 Server Log", url="https://mclo.gs/abc"),
            ReplyField(title="Forge Log", url="https://mclo.gs/def"),
        ]
        assert "2 files" in reply.description

    def test_missing_insights_uses_fallback_title(self) -> None:
        reply = build_reply([_outcome("abc")])

        assert reply is not None
        assert reply.fields == [ReplyField(title=FALLBACK_TITLE, url="https://mclo.gs/abc")]
        assert "1 file " in reply.description

    def test_empty_insights_title_uses_fallback(self) -> None:
        reply = build_reply([_outcome("abc", "")])
        assert reply is not None
        assert reply.fields[0].title == FALLBACK_TITLE

    def test_branding_and_timestamp(self) -> None:
        now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        reply = build_reply([_outcome("abc")], icon_url="https://cdn.test/avatar.png", now=now)

        assert reply is not None
        assert reply.author_name == SERVICE_NAME
        assert reply.author_url == "https://mclo.gs/"
        assert reply.author_icon_url == "https://cdn.test/avatar.png"
        assert reply.color == ACCENT_COLOR
        assert reply.timestamp == now
        assert "mclo.gs" in reply.footer

    def test_description_links_the_service(self) -> None:
        reply = build_reply([_outcome("abc")])

        assert reply is not None
        assert "[mclo.gs](https://mclo.gs/)" in reply.description
        assert "(https://aternos.org/)" in reply.description
