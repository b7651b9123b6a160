"""
Tests for the page fetcher's failure classification.
"""

import httpx
import pytest

from conftest import BASE
from solana_docs import DocsConfig, PageFetcher, PageFetchError
from solana_docs.client import create_http_client, open_fetcher
from solana_docs.models import FetchResult


@pytest.mark.asyncio
async def test_fetch_success(site, fetcher):
    site.add(f"{BASE}/developing", "<h1>Developing</h1>")

    result = await fetcher.fetch(f"{BASE}/developing")

    assert result.ok
    assert result.markup == "<h1>Developing</h1>"
    assert result.unwrap() == "<h1>Developing</h1>"


@pytest.mark.asyncio
async def test_non_success_status_is_a_failure(site, fetcher):
    site.add(f"{BASE}/broken", "oops", status=500)

    missing = await fetcher.fetch(f"{BASE}/missing")
    broken = await fetcher.fetch(f"{BASE}/broken")

    assert not missing.ok
    assert missing.reason == "Request failed with status code 404"
    assert broken.reason == "Request failed with status code 500"


@pytest.mark.asyncio
async def test_network_error_reason_is_the_error_message(site, fetcher):
    site.fail(f"{BASE}/down", httpx.ConnectError("Connection refused"))

    result = await fetcher.fetch(f"{BASE}/down")

    assert not result.ok
    assert result.reason == "Connection refused"


@pytest.mark.asyncio
async def test_error_without_message_is_unknown(site, fetcher):
    site.fail(f"{BASE}/slow", httpx.ReadTimeout(""))

    result = await fetcher.fetch(f"{BASE}/slow")

    assert result.reason == "Unknown error"


@pytest.mark.asyncio
async def test_redirects_are_followed(site, fetcher):
    site.redirect(f"{BASE}/old", f"{BASE}/new")
    site.add(f"{BASE}/new", "moved here")

    result = await fetcher.fetch(f"{BASE}/old")

    assert result.ok
    assert result.markup == "moved here"
    assert site.requested == [f"{BASE}/old", f"{BASE}/new"]


def test_unwrap_raises_page_fetch_error():
    result = FetchResult.failure(f"{BASE}/x", "Request failed with status code 404")

    with pytest.raises(PageFetchError) as exc_info:
        result.unwrap()

    assert exc_info.value.url == f"{BASE}/x"
    assert str(exc_info.value) == "Request failed with status code 404"


def test_failure_without_reason_defaults_to_unknown():
    assert FetchResult.failure("u", "").reason == "Unknown error"


@pytest.mark.asyncio
async def test_http_client_uses_config():
    config = DocsConfig(timeout=2.5, user_agent="tests/1.0")

    async with create_http_client(config) as client:
        assert client.timeout.read == 2.5
        assert client.headers["User-Agent"] == "tests/1.0"
        assert client.follow_redirects


@pytest.mark.asyncio
async def test_open_fetcher_reuses_injected_fetcher(fetcher):
    async with open_fetcher(fetcher=fetcher) as pages:
        assert pages is fetcher


@pytest.mark.asyncio
async def test_open_fetcher_creates_and_closes_client():
    async with open_fetcher(DocsConfig()) as pages:
        assert isinstance(pages, PageFetcher)
        http_client = pages._http
        assert not http_client.is_closed

    assert http_client.is_closed


@pytest.mark.asyncio
async def test_invalid_url_is_a_failure(site, fetcher):
    result = await fetcher.fetch("https://docs.solana.com:notaport/x")

    assert not result.ok
    assert "notaport" in result.reason
    assert site.requested == []
