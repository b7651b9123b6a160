"""
Navigation enumeration for the documentation landing page.
"""

from typing import List

from .client import PageFetcher
from .extractor import parse
from .models import DEFAULT_CONFIG, NAV_LINK_SELECTOR, DocsConfig, NavLink


def extract_nav_links(markup: str, selector: str = NAV_LINK_SELECTOR) -> List[NavLink]:
    """
    Collect sidebar anchors in document order.

    Anchors without an href are skipped. Duplicates are kept; each
    occurrence is its own search candidate.
    """
    soup = parse(markup)
    links = []
    for anchor in soup.select(selector):
        href = anchor.get("href")
        if not href:
            continue
        links.append(NavLink(href=href, label=anchor.get_text()))
    return links


async def enumerate_nav_links(
    fetcher: PageFetcher,
    config: DocsConfig = DEFAULT_CONFIG
) -> List[NavLink]:
    """
    Fetch the landing page and list its navigation links.

    Raises:
        PageFetchError: If the landing page can't be fetched
    """
    result = await fetcher.fetch(config.base_docs_url)
    return extract_nav_links(result.unwrap())
