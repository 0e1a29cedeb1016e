"""
Description: MCP protocol server shared by the stdio and Streamable HTTP transports
Main features:
    - Binds one ToolRegistry to an MCP low-level Server
    - Advertises tools; resources and prompts are always empty
    - Every failed call is reported as an "Error: ..." result with isError
"""

from __future__ import annotations

from typing import Any

from mcp import types
from mcp.server import Server

from apex_mcp.apex.models import ToolResult
from apex_mcp.config import Credentials
from apex_mcp.errors import ApexMCPError
from apex_mcp.tools.registry import ToolRegistry


SERVER_NAME = "apex-mcp"


class ToolCallFailed(RuntimeError):
    """Carries an error ToolResult text to the SDK, which reports it with isError"""


def to_mcp_tool(schema: dict[str, Any]) -> types.Tool:
    return types.Tool(
        name=schema["name"],
        description=schema["description"],
        inputSchema=schema["inputSchema"],
    )


# region Server factory
def create_server(registry: ToolRegistry) -> Server:
    """Build an MCP server whose handlers delegate to the registry"""
    server: Server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(schema) for schema in registry.list_tools()]

    # the registry's pydantic models validate arguments, not the SDK's jsonschema pass
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        try:
            result = await registry.call(name, arguments)
        except ApexMCPError as exc:
            result = ToolResult.from_error(exc)
        if result.is_error:
            raise ToolCallFailed(result.text)
        return [types.TextContent(type="text", text=block.text) for block in result.content]

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return []

    @server.list_prompts()
    async def list_prompts() -> list[types.Prompt]:
        return []

    return server


def build_server(bearer_token: str | None, api_url: str | None = None, **registry_options: Any) -> Server:
    """
    Server factory for hosts that pass credentials directly

    Raises:
        ConfigurationError: bearer token is empty
    """
    credentials = Credentials.create(bearer_token, api_url)
    return create_server(ToolRegistry(credentials, **registry_options))
# endregion
