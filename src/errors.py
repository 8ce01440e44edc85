"""Exception hierarchy shared by the paste client and the upload pipeline."""

from __future__ import annotations


class PasteBotError(Exception):
    """Base class for every error raised by this project."""


class TransportError(PasteBotError):
    """Network or connection failure, including non-2xx attachment downloads."""


class DecodingError(PasteBotError):
    """A response body could not be decoded."""


class ServiceError(PasteBotError):
    """The remote API reported a failure of its own."""


class SizeLimitExceeded(PasteBotError):
    """Content is larger than the local size ceiling."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Content too large: {size} bytes (max {limit})")
        self.size = size
        self.limit = limit


class UnsupportedContentType(PasteBotError):
    """Downloaded content is not plain text."""


class ConfigurationError(PasteBotError):
    """Required configuration is missing or invalid."""
