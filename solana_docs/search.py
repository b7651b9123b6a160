"""
Full-text search across the pages linked from the docs navigation.

Every internal link is fetched and checked concurrently. A branch that
fails is logged and dropped; it never aborts the search or shows up in the
result, so a search where every page failed looks the same as one where
nothing matched.
"""

import asyncio
import logging
from contextlib import nullcontext
from typing import List, Optional, Sequence

from .client import PageFetcher
from .extractor import DOCS_PAGE_RULES, extract
from .formatters import error_message, truncate
from .models import (
    DEFAULT_CONFIG,
    SEARCH_PREVIEW_LIMIT,
    DocSection,
    DocsConfig,
    NavLink,
    PageOutcome,
    SearchSummary,
)

logger = logging.getLogger(__name__)


def matches(body: str, query: str) -> bool:
    """Case-insensitive substring test."""
    return query.lower() in body.lower()


class DocsSearcher:
    """
    Fans a query out over navigation links and collects the matches.

    Parallelism is unbounded unless config.max_concurrency is set.
    """

    def __init__(self, fetcher: PageFetcher, config: DocsConfig = DEFAULT_CONFIG):
        self._fetcher = fetcher
        self._config = config
        self._limit: Optional[asyncio.Semaphore] = (
            asyncio.Semaphore(config.max_concurrency) if config.max_concurrency else None
        )

    async def search(self, query: str, links: Sequence[NavLink]) -> List[DocSection]:
        """
        Search every internal link for the query.

        Args:
            query: Text to look for, case-insensitive
            links: Navigation links in document order

        Returns:
            Matching sections, in navigation order
        """
        summary = SearchSummary()
        candidates = []
        for link in links:
            if link.is_internal:
                candidates.append(link)
            else:
                summary.skipped += 1
        summary.candidates = len(candidates)

        outcomes = await asyncio.gather(
            *(self._search_page(query, link) for link in candidates)
        )

        results = []
        for outcome in outcomes:
            if outcome.failed:
                summary.failed += 1
            elif outcome.matched:
                results.append(outcome.section)
        summary.matched = len(results)

        logger.info(
            "Search %r: %d pages checked, %d matched, %d failed, %d external skipped",
            query, summary.candidates, summary.matched, summary.failed, summary.skipped
        )
        return results

    def page_url(self, link: NavLink) -> str:
        """Resolve an internal href against the docs origin."""
        path = link.href if link.href.startswith("/") else f"/{link.href}"
        return f"{self._config.base_docs_url}{path}"

    async def _search_page(self, query: str, link: NavLink) -> PageOutcome:
        """Fetch, extract and match a single page."""
        url = self.page_url(link)

        async with self._limit or nullcontext():
            result = await self._fetcher.fetch(url)

        if not result.ok:
            logger.warning("Error searching page %s: %s", link.href, result.reason)
            return PageOutcome(link=link, reason=result.reason)

        try:
            page = extract(result.markup, DOCS_PAGE_RULES)
        except Exception as e:
            logger.warning("Error searching page %s: %s", link.href, e)
            return PageOutcome(link=link, reason=error_message(e))

        if not matches(page.body, query):
            return PageOutcome(link=link)

        return PageOutcome(
            link=link,
            section=DocSection(
                title=page.title or link.label,
                content=truncate(
                    page.body,
                    SEARCH_PREVIEW_LIMIT,
                    always_mark=self._config.always_append_ellipsis
                ),
                url=url
            )
        )
