"""
Description: MCP Streamable HTTP endpoint mounted at /mcp
Main features:
    - Stateless sessions, a fresh transport for every POST
    - JSON responses instead of SSE streams
"""

from __future__ import annotations

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.types import Receive, Scope, Send

from apex_mcp.server.mcp_server import create_server
from apex_mcp.tools.registry import ToolRegistry


MCP_PATH = "/mcp"


def create_session_manager(registry: ToolRegistry) -> StreamableHTTPSessionManager:
    """
    Session manager for one registry

    The manager must be running (``async with manager.run()``) before it
    accepts requests; the app lifespan takes care of that.
    """
    return StreamableHTTPSessionManager(
        app=create_server(registry),
        json_response=True,
        stateless=True,
    )


class StreamableHTTPEndpoint:
    """ASGI endpoint forwarding raw requests to the session manager"""

    def __init__(self, manager: StreamableHTTPSessionManager) -> None:
        self._manager = manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self._manager.handle_request(scope, receive, send)
