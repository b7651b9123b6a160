"""
Content extraction from documentation markup.

Selector rules are data: each page type declares which element holds its
title and which holds its body, and a single extract() applies them.
"""

from bs4 import BeautifulSoup

from .models import ExtractedContent, SelectorRules


# Solana docs section page
DOCS_PAGE_RULES = SelectorRules(
    title="h1",
    body=".markdown-section"
)

# docs.rs item page: signature block for the title, first docblock for the body
API_REFERENCE_RULES = SelectorRules(
    title=".rust.fn, .rust.struct, .rust.trait",
    body=".docblock"
)


def parse(markup: str) -> BeautifulSoup:
    """Parse markup into a traversable document tree."""
    return BeautifulSoup(markup, "html.parser")


def first_text(soup: BeautifulSoup, selector: str) -> str:
    """
    Text of the first element matching a selector.

    Args:
        soup: Parsed document
        selector: CSS selector (selector lists allowed)

    Returns:
        Concatenated descendant text, or "" when nothing matches
    """
    element = soup.select_one(selector)
    if element is None:
        return ""
    return element.get_text()


def extract(markup: str, rules: SelectorRules) -> ExtractedContent:
    """
    Pull a title and body out of raw markup.

    No sanitization or link rewriting is done; the body is the plain text
    of the content container.

    Args:
        markup: Raw HTML
        rules: Title and body selectors for this page type

    Returns:
        ExtractedContent with empty strings for missing parts
    """
    soup = parse(markup)
    return ExtractedContent(
        title=first_text(soup, rules.title),
        body=first_text(soup, rules.body)
    )
