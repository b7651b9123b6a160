#!/usr/bin/env python3
"""
Solana Docs MCP Server

An MCP server for reading the Solana documentation.
Lets AI agents fetch documentation sections, search across the docs
navigation, and look up Solana SDK API reference entries.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from solana_docs import (
    PageFetcher,
    ToolResponse,
    get_api_reference,
    get_latest_docs,
    search_docs,
)

# Configure logging (stderr; stdout carries the protocol)
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("solana-docs")

# Initialize MCP server
app = Server("solana-docs-server", version="0.1.0")


# ============================================================================
# Input Models (Pydantic v2)
# ============================================================================

class GetLatestDocsInput(BaseModel):
    """Input model for fetching a documentation section."""
    model_config = ConfigDict(extra="ignore")

    section: str = Field(
        ...,
        description='Documentation section to fetch (e.g., "developing", "running-validator", "economics")',
        min_length=1,
        strict=True
    )


class SearchDocsInput(BaseModel):
    """Input model for searching the documentation."""
    model_config = ConfigDict(extra="ignore")

    query: str = Field(
        ...,
        description="Search query",
        min_length=1,
        strict=True
    )


class GetApiReferenceInput(BaseModel):
    """Input model for an SDK API reference lookup."""
    model_config = ConfigDict(extra="ignore")

    item: str = Field(
        ...,
        description='API item to look up (e.g., "transaction", "pubkey", "system_instruction")',
        min_length=1,
        strict=True
    )


# ============================================================================
# Tool Registry
# ============================================================================

Handler = Callable[[Any, Optional[PageFetcher]], Awaitable[ToolResponse]]


@dataclass(frozen=True)
class ToolSpec:
    """A tool as advertised by list_tools and dispatched by call_tool."""
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Handler

    def to_tool(self) -> types.Tool:
        schema = self.input_model.model_json_schema()
        schema.pop("title", None)
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=schema,
            annotations=types.ToolAnnotations(
                readOnlyHint=True,
                openWorldHint=True
            )
        )


async def _latest_docs(params: GetLatestDocsInput, fetcher: Optional[PageFetcher]) -> ToolResponse:
    return await get_latest_docs(params.section, fetcher=fetcher)


async def _search_docs(params: SearchDocsInput, fetcher: Optional[PageFetcher]) -> ToolResponse:
    return await search_docs(params.query, fetcher=fetcher)


async def _api_reference(params: GetApiReferenceInput, fetcher: Optional[PageFetcher]) -> ToolResponse:
    return await get_api_reference(params.item, fetcher=fetcher)


TOOLS: Dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            name="get_latest_docs",
            description="Get latest Solana documentation sections",
            input_model=GetLatestDocsInput,
            handler=_latest_docs
        ),
        ToolSpec(
            name="search_docs",
            description="Search through Solana documentation",
            input_model=SearchDocsInput,
            handler=_search_docs
        ),
        ToolSpec(
            name="get_api_reference",
            description="Get Solana SDK API reference details",
            input_model=GetApiReferenceInput,
            handler=_api_reference
        ),
    )
}


# ============================================================================
# Dispatch
# ============================================================================

def validate_arguments(spec: ToolSpec, arguments: Optional[Dict[str, Any]]) -> BaseModel:
    """
    Validate tool arguments against the tool's input model.

    Raises:
        McpError: INVALID_PARAMS when the required field is missing,
            not a string, or empty
    """
    try:
        return spec.input_model.model_validate(arguments or {})
    except ValidationError as e:
        errors = e.errors()
        field = errors[0]["loc"][0] if errors and errors[0]["loc"] else "input"
        raise McpError(types.ErrorData(
            code=types.INVALID_PARAMS,
            message=f"Invalid {field} parameter"
        )) from e


async def call_tool(
    name: str,
    arguments: Optional[Dict[str, Any]],
    fetcher: Optional[PageFetcher] = None
) -> types.CallToolResult:
    """
    Run a tool by name.

    Unknown names and bad arguments raise McpError before any network
    activity. Fetch failures come back as a result with isError set.

    Args:
        name: Tool name
        arguments: Raw tool arguments
        fetcher: Optional fetcher override, mainly for tests

    Returns:
        CallToolResult with a single text block
    """
    spec = TOOLS.get(name)
    if spec is None:
        raise McpError(types.ErrorData(
            code=types.METHOD_NOT_FOUND,
            message=f"Unknown tool: {name}"
        ))

    params = validate_arguments(spec, arguments)
    response = await spec.handler(params, fetcher)

    return types.CallToolResult(
        content=[types.TextContent(type="text", text=response.text)],
        isError=response.is_error
    )


@app.list_tools()
async def list_tools() -> List[types.Tool]:
    """List available MCP tools."""
    return [spec.to_tool() for spec in TOOLS.values()]


async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
    """
    CallToolRequest handler.

    Registered directly on the request table so McpError reaches the
    client as a JSON-RPC error instead of being folded into a tool result.
    """
    try:
        result = await call_tool(request.params.name, request.params.arguments)
    except McpError as e:
        logger.warning("[MCP Error] %s: %s", request.params.name, e.error.message)
        raise
    return types.ServerResult(result)


app.request_handlers[types.CallToolRequest] = handle_call_tool


# ============================================================================
# Server Entry Point
# ============================================================================

async def main():
    """Run the MCP server using stdio transport."""
    logger.info("Starting Solana Docs MCP Server")

    async with stdio_server() as (read_stream, write_stream):
        logger.info("Solana Docs MCP server running on stdio")
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options()
        )


def run():
    """Console entry point; SIGINT closes the transport and exits cleanly."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted, transport closed")


if __name__ == "__main__":
    run()
