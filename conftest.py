"""
Shared fixtures: a fake documentation site served through httpx.MockTransport.
"""

import asyncio
from typing import Dict, List, Optional, Sequence, Tuple

import httpx
import pytest
import pytest_asyncio

from solana_docs import DocsConfig, PageFetcher, create_http_client

BASE = "https://docs.solana.com"
API = "https://docs.rs/solana-sdk/latest/solana_sdk"


def _key(url: str) -> str:
    return str(httpx.URL(url)).rstrip("/")


def docs_page(title: str, body: str) -> str:
    """Markup shaped like a docs section page."""
    return f"""
    <html>
      <head><title>{title} | Solana Docs</title></head>
      <body>
        <main>
          <h1>{title}</h1>
          <div class="markdown-section"><p>{body}</p></div>
        </main>
      </body>
    </html>
    """


def landing_page(links: Sequence[Tuple[str, str]]) -> str:
    """Markup with a sidebar listing (href, label) pairs."""
    items = "\n".join(f'<li><a href="{href}">{label}</a></li>' for href, label in links)
    return f"""
    <html>
      <body>
        <aside><ul class="sidebar-nav">{items}</ul></aside>
        <footer><a href="/not-in-sidebar">Footer</a></footer>
      </body>
    </html>
    """


class FakeSite:
    """
    Serves canned responses and records every requested URL.

    Unknown URLs answer 404. Entries may also be exceptions, which are
    raised from the transport like a real network failure.
    """

    def __init__(self):
        self.pages: Dict[str, object] = {}
        self.requested: List[str] = []
        self.delay = 0.0
        self.in_flight = 0
        self.peak = 0

    def add(self, url: str, body: str, status: int = 200, headers: Optional[dict] = None):
        self.pages[_key(url)] = (status, body, headers or {})

    def fail(self, url: str, error: Exception):
        self.pages[_key(url)] = error

    def redirect(self, url: str, location: str):
        self.add(url, "", status=302, headers={"Location": location})

    async def handler(self, request: httpx.Request) -> httpx.Response:
        url = _key(str(request.url))
        self.requested.append(url)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            entry = self.pages.get(url)
            if entry is None:
                return httpx.Response(404, text="Not Found")
            if isinstance(entry, Exception):
                raise entry
            status, body, headers = entry
            return httpx.Response(status, text=body, headers=headers)
        finally:
            self.in_flight -= 1


@pytest.fixture
def site() -> FakeSite:
    return FakeSite()


@pytest.fixture
def config() -> DocsConfig:
    return DocsConfig()


@pytest_asyncio.fixture
async def fetcher(site, config):
    transport = httpx.MockTransport(site.handler)
    async with create_http_client(config, transport=transport) as http_client:
        yield PageFetcher(http_client)
