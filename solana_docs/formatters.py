"""
Response formatting for query handlers.

Builds the JSON envelopes returned to MCP clients and the plain-text
error messages used when a request fails.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .models import (
    ELLIPSIS,
    UNKNOWN_ERROR,
    DocSection,
    ToolResponse,
)


def truncate(text: str, limit: int, always_mark: bool = True) -> str:
    """
    Keep the first `limit` characters and append the ellipsis marker.

    Args:
        text: Text to shorten
        limit: Number of characters to keep
        always_mark: Append the marker even when nothing was cut

    Returns:
        Truncated text, never longer than limit + len(ELLIPSIS)
    """
    if len(text) <= limit and not always_mark:
        return text
    return text[:limit] + ELLIPSIS


def timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T00:00:00.000Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_envelope(fields: Dict[str, Any]) -> ToolResponse:
    """
    Wrap result fields in a pretty-printed JSON envelope with a timestamp.
    """
    payload = dict(fields)
    payload["timestamp"] = timestamp()
    return ToolResponse(text=json.dumps(payload, indent=2, ensure_ascii=False))


def format_section(title: str, content: str, url: str) -> ToolResponse:
    return format_envelope({"title": title, "content": content, "url": url})


def format_search_results(query: str, results: List[DocSection]) -> ToolResponse:
    return format_envelope({
        "query": query,
        "results": [asdict(section) for section in results]
    })


def format_api_reference(item: str, signature: str, documentation: str, url: str) -> ToolResponse:
    return format_envelope({
        "item": item,
        "signature": signature,
        "documentation": documentation,
        "url": url
    })


def error_message(error: Exception) -> str:
    """Message of an exception, or a generic fallback when it has none."""
    return str(error).strip() or UNKNOWN_ERROR


def format_error(error: Exception, context: str) -> ToolResponse:
    """
    Inline error response for a recognized operation.

    Args:
        error: The exception that occurred
        context: What was being attempted, e.g. "fetching docs"

    Returns:
        ToolResponse flagged as an error
    """
    return ToolResponse(
        text=f"Error {context}: {error_message(error)}",
        is_error=True
    )
