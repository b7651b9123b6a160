"""
Solana Docs - retrieval and search over the Solana documentation site.

Public API for the three query operations exposed by the MCP server.
Each handler returns a ToolResponse: a JSON envelope on success, or an
error message flagged with is_error when the remote page can't be fetched
or read.
"""

import logging
from typing import Optional

from .client import PageFetcher, create_http_client, open_fetcher
from .extractor import API_REFERENCE_RULES, DOCS_PAGE_RULES, extract
from .formatters import (
    format_api_reference,
    format_error,
    format_search_results,
    format_section,
    truncate,
)
from .models import (
    DEFAULT_CONFIG,
    DOCS_CONTENT_LIMIT,
    DocSection,
    DocsConfig,
    NavLink,
    PageFetchError,
    ToolResponse,
)
from .navigation import enumerate_nav_links
from .search import DocsSearcher

__all__ = [
    'get_latest_docs',
    'search_docs',
    'get_api_reference',
    'DocsConfig',
    'DocSection',
    'NavLink',
    'PageFetcher',
    'PageFetchError',
    'ToolResponse',
    'create_http_client',
]

logger = logging.getLogger(__name__)


async def get_latest_docs(
    section: str,
    fetcher: Optional[PageFetcher] = None,
    config: DocsConfig = DEFAULT_CONFIG
) -> ToolResponse:
    """
    Fetch one documentation section.

    Args:
        section: Section path under the docs origin (e.g. "developing")
        fetcher: Optional fetcher to reuse; a per-request one is opened otherwise
        config: Origins, timeout and truncation settings

    Returns:
        Envelope with title, content (first 1000 characters), url and
        timestamp, or an error response

    Example:
        >>> result = await get_latest_docs("running-validator")
        >>> print(result.text)
    """
    url = f"{config.base_docs_url}/{section}"
    try:
        async with open_fetcher(config, fetcher) as pages:
            result = await pages.fetch(url)
        page = extract(result.unwrap(), DOCS_PAGE_RULES)

        return format_section(
            title=page.title,
            content=truncate(
                page.body,
                DOCS_CONTENT_LIMIT,
                always_mark=config.always_append_ellipsis
            ),
            url=url
        )

    except Exception as e:
        response = format_error(e, "fetching docs")
        logger.error(response.text)
        return response


async def search_docs(
    query: str,
    fetcher: Optional[PageFetcher] = None,
    config: DocsConfig = DEFAULT_CONFIG
) -> ToolResponse:
    """
    Search the pages linked from the docs navigation.

    The landing page must be reachable; individual pages that fail are
    skipped. Results carry 200-character previews and are not ranked.

    Args:
        query: Case-insensitive text to look for
        fetcher: Optional fetcher to reuse; a per-request one is opened otherwise
        config: Origins, timeout, truncation and concurrency settings

    Returns:
        Envelope with query, results and timestamp, or an error response
        when the landing page can't be fetched
    """
    try:
        async with open_fetcher(config, fetcher) as pages:
            links = await enumerate_nav_links(pages, config)
            results = await DocsSearcher(pages, config).search(query, links)

        return format_search_results(query, results)

    except Exception as e:
        response = format_error(e, "searching docs")
        logger.error(response.text)
        return response


async def get_api_reference(
    item: str,
    fetcher: Optional[PageFetcher] = None,
    config: DocsConfig = DEFAULT_CONFIG
) -> ToolResponse:
    """
    Look up an item in the SDK API reference.

    The item is lower-cased to build the URL ("PubKey" -> .../pubkey) but
    echoed back as given.

    Returns:
        Envelope with item, signature, documentation, url and timestamp,
        or an error response
    """
    url = f"{config.api_docs_url}/{item.lower()}"
    try:
        async with open_fetcher(config, fetcher) as pages:
            result = await pages.fetch(url)
        page = extract(result.unwrap(), API_REFERENCE_RULES)

        return format_api_reference(
            item=item,
            signature=page.title,
            documentation=page.body,
            url=url
        )

    except Exception as e:
        response = format_error(e, "fetching API reference")
        logger.error(response.text)
        return response
