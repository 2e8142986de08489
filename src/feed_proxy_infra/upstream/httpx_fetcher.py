"""httpx-backed implementation of UpstreamFetcher."""

from __future__ import annotations

import httpx
import structlog

from feed_proxy_core.exceptions import FetchError, excerpt

logger = structlog.get_logger()


class HttpxUpstreamFetcher:
    """Fetches upstream API documents over a shared async client."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        user_agent: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize with a timeout, or with a preconfigured client."""
        if client is None:
            headers = {"User-Agent": user_agent} if user_agent else None
            client = httpx.AsyncClient(timeout=timeout_seconds, headers=headers)
        self._client = client

    async def fetch(self, url: str) -> bytes:
        """GET ``url`` and return the body of a 200 response.

        Raises FetchError on transport failure or any other status.
        """
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("upstream_request_failed", url=url, error=str(exc))
            raise FetchError(url, body=str(exc)) from exc

        if response.status_code != httpx.codes.OK:
            body = excerpt(response.content)
            logger.warning("upstream_bad_status", url=url, status=response.status_code)
            raise FetchError(url, status=response.status_code, body=body)

        return response.content

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
