"""Abstract upstream fetcher interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class UpstreamFetcher(Protocol):
    """Issues one GET request for a fully formed URL."""

    async def fetch(self, url: str) -> bytes:
        """Return the response body, or raise FetchError."""
        ...
