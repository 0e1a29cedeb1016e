"""
HTTP API for MCP tools.

Every request gets its own ToolRegistry built from the app's credentials.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from apex_mcp.apex.client import ApexClient
from apex_mcp.apex.models import ToolResult
from apex_mcp.config import Settings
from apex_mcp.errors import ToolNotFoundError, ToolValidationError
from apex_mcp.server.schema import (
    PromptListResponse,
    ResourceListResponse,
    ToolCallRequest,
    ToolListResponse,
    ToolRequest,
)
from apex_mcp.tools.registry import ToolRegistry, catalog


router = APIRouter()


def get_registry(request: Request) -> ToolRegistry:
    state = request.app.state
    settings: Settings = state.settings
    client = ApexClient(
        state.credentials,
        timeout=settings.apex.request.timeout,
        transport=getattr(state, "apex_transport", None),
    )
    return ToolRegistry(state.credentials, client=client, enabled=settings.tools.enabled)


async def _call(registry: ToolRegistry, tool_name: str, arguments: dict[str, Any]) -> ToolResult:
    try:
        return await registry.call(tool_name, arguments)
    except ToolNotFoundError as exc:
        if any(spec.name == tool_name for spec in catalog()):
            raise HTTPException(status_code=403, detail="Tool disabled") from exc
        raise HTTPException(status_code=404, detail="Tool not found") from exc
    except ToolValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict()) from exc


@router.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok", "service": "apex-mcp"}


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/mcp/tools", response_model=ToolListResponse)
async def list_tools(registry: ToolRegistry = Depends(get_registry)) -> ToolListResponse:
    return ToolListResponse(tools=registry.list_tools())


@router.get("/mcp/resources", response_model=ResourceListResponse)
async def list_resources(registry: ToolRegistry = Depends(get_registry)) -> ResourceListResponse:
    return ResourceListResponse(resources=registry.list_resources())


@router.get("/mcp/prompts", response_model=PromptListResponse)
async def list_prompts(registry: ToolRegistry = Depends(get_registry)) -> PromptListResponse:
    return PromptListResponse(prompts=registry.list_prompts())


@router.post("/mcp/tools/{tool_name}", response_model=ToolResult)
async def call_tool(
    tool_name: str,
    request: ToolRequest,
    registry: ToolRegistry = Depends(get_registry),
) -> ToolResult:
    return await _call(registry, tool_name, request.arguments)


@router.post("/mcp/call", response_model=ToolResult)
async def call(request: ToolCallRequest, registry: ToolRegistry = Depends(get_registry)) -> ToolResult:
    return await _call(registry, request.name, request.arguments)
