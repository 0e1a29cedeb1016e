"""MCP stdio transport."""

from __future__ import annotations

import logging

from mcp.server.stdio import stdio_server

from apex_mcp.server.mcp_server import create_server
from apex_mcp.tools.registry import ToolRegistry


logger = logging.getLogger(__name__)


async def serve_stdio(registry: ToolRegistry) -> None:
    """Run the MCP server on stdin/stdout until the pipe closes"""
    server = create_server(registry)
    logger.info("Apex MCP server started with STDIO transport", extra={"tools": len(registry.names())})
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
