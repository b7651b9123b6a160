"""
Internal types for the solana_docs package.

These types are used after input validation has already happened at the
MCP boundary (server.py). They are plain dataclasses without validation
logic.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit


# ============================================================================
# Constants
# ============================================================================

BASE_DOCS_URL = "https://docs.solana.com"
API_DOCS_URL = "https://docs.rs/solana-sdk/latest/solana_sdk"

DEFAULT_TIMEOUT = 30.0  # seconds
USER_AGENT = "solana-docs-server/0.1.0"

# Truncation
DOCS_CONTENT_LIMIT = 1000
SEARCH_PREVIEW_LIMIT = 200
ELLIPSIS = "..."

# Anchors in the landing page sidebar
NAV_LINK_SELECTOR = ".sidebar-nav a"

UNKNOWN_ERROR = "Unknown error"


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class DocsConfig:
    """
    Explicit configuration threaded through the fetcher, enumerator,
    search orchestrator and query handlers.

    Attributes:
        base_docs_url: Origin of the documentation site (no trailing slash)
        api_docs_url: Root of the SDK API reference (no trailing slash)
        timeout: Per-request HTTP timeout in seconds
        user_agent: User-Agent header sent with every request
        max_concurrency: Cap on in-flight search branches, None for unbounded
        always_append_ellipsis: Append the ellipsis marker even when the
            text was shorter than the cutoff
    """
    base_docs_url: str = BASE_DOCS_URL
    api_docs_url: str = API_DOCS_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT
    max_concurrency: Optional[int] = None
    always_append_ellipsis: bool = True


DEFAULT_CONFIG = DocsConfig()


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class SelectorRules:
    """
    CSS selectors describing where a page keeps its title and body.

    Attributes:
        title: Selector whose first match supplies the title
        body: Selector whose first match supplies the body text
    """
    title: str
    body: str


@dataclass(frozen=True)
class ExtractedContent:
    """Title and plain-text body pulled out of a page."""
    title: str
    body: str


@dataclass(frozen=True)
class DocSection:
    """
    A fetched or matched documentation page fragment.

    Attributes:
        title: Page title
        content: Plain text, already truncated
        url: Absolute URL of the page
    """
    title: str
    content: str
    url: str


@dataclass(frozen=True)
class NavLink:
    """
    An anchor from the documentation sidebar.

    Attributes:
        href: Relative path or absolute URL, as written in the markup
        label: Anchor text
    """
    href: str
    label: str

    @property
    def is_internal(self) -> bool:
        """True for links that resolve against the docs origin."""
        if self.href.startswith("//"):
            return False
        return not urlsplit(self.href).scheme


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of a single page fetch: markup on success, a reason on failure.
    """
    url: str
    markup: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def success(cls, url: str, markup: str) -> "FetchResult":
        return cls(url=url, markup=markup)

    @classmethod
    def failure(cls, url: str, reason: str) -> "FetchResult":
        return cls(url=url, reason=reason or UNKNOWN_ERROR)

    def unwrap(self) -> str:
        """
        Return the fetched markup.

        Raises:
            PageFetchError: If the fetch failed
        """
        if not self.ok:
            raise PageFetchError(self.url, self.reason)
        return self.markup


@dataclass(frozen=True)
class PageOutcome:
    """
    Result of one search branch.

    A matched branch carries a section, a failed branch carries a reason,
    and a branch that simply didn't match carries neither.
    """
    link: NavLink
    section: Optional[DocSection] = None
    reason: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.section is not None

    @property
    def failed(self) -> bool:
        return self.reason is not None


@dataclass
class ToolResponse:
    """
    Text payload returned by a query handler.

    Attributes:
        text: Pretty-printed JSON envelope, or an error message
        is_error: Whether the text describes a failure
    """
    text: str
    is_error: bool = False


@dataclass
class SearchSummary:
    """Counts collected while fanning out a search."""
    candidates: int = 0
    matched: int = 0
    failed: int = 0
    skipped: int = 0  # external links


# ============================================================================
# Custom Exceptions
# ============================================================================

class PageFetchError(Exception):
    """
    Raised when a page needed by a single-page operation can't be fetched.

    Attributes:
        url: The URL that was requested
        reason: Human-readable failure reason
    """
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(reason)
