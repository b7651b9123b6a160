"""
Page fetcher with httpx.

Retrieves raw markup from the documentation origins and classifies
failures into FetchResult values instead of raising. The HTTP client is
built from an explicit DocsConfig so tests can inject a fake transport.

All I/O is async via httpx.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from .models import (
    DEFAULT_CONFIG,
    UNKNOWN_ERROR,
    DocsConfig,
    FetchResult,
)


def create_http_client(
    config: DocsConfig = DEFAULT_CONFIG,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """
    Build the async HTTP client used for every page fetch.

    Args:
        config: Timeout and header settings
        transport: Optional transport override (e.g. httpx.MockTransport)

    Returns:
        Configured httpx.AsyncClient that follows redirects
    """
    return httpx.AsyncClient(
        timeout=config.timeout,
        follow_redirects=True,
        headers={"User-Agent": config.user_agent},
        transport=transport
    )


class PageFetcher:
    """
    Fetches pages with a single GET each, no retries.

    Never raises for transport or status errors; callers decide whether a
    failure is fatal (single-page operations) or skippable (search).
    """

    def __init__(self, http_client: httpx.AsyncClient):
        """
        Initialize the fetcher.

        Args:
            http_client: Client owned by the caller; not closed here
        """
        self._http = http_client

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch raw markup for a URL.

        Args:
            url: Absolute URL to request

        Returns:
            FetchResult carrying the markup, or the failure reason
        """
        try:
            response = await self._http.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return FetchResult.failure(url, _describe(e))

        if not response.is_success:
            return FetchResult.failure(
                url, f"Request failed with status code {response.status_code}"
            )

        return FetchResult.success(url, response.text)


@asynccontextmanager
async def open_fetcher(
    config: DocsConfig = DEFAULT_CONFIG,
    fetcher: Optional[PageFetcher] = None
) -> AsyncIterator[PageFetcher]:
    """
    Yield the injected fetcher, or a fresh one for the duration of a request.

    A fetcher created here owns its HTTP client and closes it on exit.
    """
    if fetcher is not None:
        yield fetcher
        return

    async with create_http_client(config) as http_client:
        yield PageFetcher(http_client)


def _describe(error: Exception) -> str:
    """Human-readable reason for a transport error."""
    message = str(error).strip()
    return message or UNKNOWN_ERROR
