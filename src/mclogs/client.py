"""mclo.gs API client.

Wraps the five public endpoints of the paste service:

- POST /1/log           store a log, returns its id and URLs
- GET  /1/raw/{id}      raw log content (plain text)
- GET  /1/insights/{id} parsed analysis of a stored log
- POST /1/analyse       analysis of content without storing it
- GET  /1/limits        storage limits

Every call opens its own connection and shares no mutable state, so the
client can be used from concurrent tasks.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from src.errors import DecodingError, ServiceError, TransportError
from src.mclogs.models import InsightsResult, Limits, PasteResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.mclo.gs"
_TIMEOUT_SECONDS = 10.0
_PLAIN_TEXT = "text/plain"
# raised by from_dict on JSON of the wrong shape
_MALFORMED = (AttributeError, KeyError, TypeError, ValueError)


class MclogsClient:
    """Async client for the mclo.gs paste and analysis API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    async def submit(self, content: str) -> PasteResult:
        """Store ``content`` as a new paste."""
        resp = await self._request("POST", "/1/log", data={"content": content})
        payload = self._decode_json(resp)
        if not payload.get("success"):
            raise ServiceError(payload.get("error") or "Paste was rejected")
        try:
            result = PasteResult.from_dict(payload)
        except _MALFORMED as exc:
            raise DecodingError(f"Malformed paste response: {exc!r}") from exc
        logger.debug("Stored paste %s at %s", result.id, result.url)
        return result

    async def fetch_raw(self, paste_id: str) -> str:
        """Return the raw content of a paste.

        The service answers with plain text on success and a JSON error
        envelope otherwise, so the content type decides which one we got.
        """
        resp = await self._request("GET", f"/1/raw/{paste_id}")
        if resp.headers.get("content-type", "").startswith(_PLAIN_TEXT):
            return resp.text
        raise ServiceError(self._error_message(self._decode_json(resp)))

    async def fetch_insights(self, paste_id: str) -> InsightsResult:
        """Return the analysis of a stored paste."""
        resp = await self._request("GET", f"/1/insights/{paste_id}")
        return self._parse_insights(resp)

    async def analyse(self, content: str) -> InsightsResult:
        """Analyse ``content`` without storing it."""
        resp = await self._request("POST", "/1/analyse", data={"content": content})
        return self._parse_insights(resp)

    async def fetch_limits(self) -> Limits:
        resp = await self._request("GET", "/1/limits")
        payload = self._decode_json(resp)
        try:
            return Limits.from_dict(payload)
        except _MALFORMED as exc:
            raise DecodingError(f"Malformed limits response: {exc!r}") from exc

    async def _request(
        self, method: str, path: str, data: dict[str, str] | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                verify=True, timeout=_TIMEOUT_SECONDS, transport=self._transport,
            ) as client:
                # httpx form-encodes ``data`` and sets the content type for us
                return await client.request(method, url, data=data)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    def _parse_insights(self, resp: httpx.Response) -> InsightsResult:
        payload = self._decode_json(resp)
        if resp.status_code != httpx.codes.OK:
            raise ServiceError(self._error_message(payload))
        if payload.get("error"):
            raise ServiceError(payload["error"])
        try:
            return InsightsResult.from_dict(payload)
        except _MALFORMED as exc:
            raise DecodingError(f"Malformed insights response: {exc!r}") from exc

    @staticmethod
    def _decode_json(resp: httpx.Response) -> dict[str, Any]:
        try:
            payload = resp.json()
        except ValueError as exc:
            raise DecodingError(
                f"Invalid JSON from {resp.request.url} (status {resp.status_code})"
            ) from exc
        if not isinstance(payload, dict):
            raise DecodingError(f"Unexpected JSON payload from {resp.request.url}")
        return payload

    @staticmethod
    def _error_message(payload: dict[str, Any]) -> str:
        return payload.get("error") or "Unknown error from mclo.gs"
