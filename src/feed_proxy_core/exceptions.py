"""Custom exception hierarchy for patreon-feed-proxy."""

from __future__ import annotations

from collections.abc import Hashable

BODY_EXCERPT_LIMIT = 512


def excerpt(body: bytes | str, limit: int = BODY_EXCERPT_LIMIT) -> str:
    """Return a printable prefix of an upstream response body."""
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class FeedProxyError(Exception):
    """Base exception for all patreon-feed-proxy errors."""


class ResolveError(FeedProxyError):
    """Raised when a cached resource cannot be resolved.

    ``stage`` names the step that failed. ``kind`` and ``key`` are filled in
    by the resolver so the HTTP layer can report which resource broke.
    """

    stage = "resolve"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.kind: str | None = None
        self.key: Hashable | None = None

    def bind(self, kind: str, key: Hashable) -> None:
        """Attach the resource kind and key being resolved."""
        self.kind = kind
        self.key = key


class FetchError(ResolveError):
    """Raised when the upstream request fails or returns a non-200 status."""

    stage = "fetch"

    def __init__(self, url: str, status: int | None = None, body: str = "") -> None:
        if status is None:
            message = f"get {url}: {body or 'request failed'}"
        else:
            message = f"get {url}: status {status}: {body}"
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body


class DecodeError(ResolveError):
    """Raised when an upstream body is not a valid payload for its resource kind."""

    stage = "decode"

    def __init__(self, body: str, cause: Exception) -> None:
        super().__init__(f"decode response: {cause}")
        self.body = body
        self.cause = cause
