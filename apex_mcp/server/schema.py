"""
Description: HTTP API request/response models
Main features:
    - Tool call request bodies
    - Tool listing envelopes
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# region API models
class ToolRequest(BaseModel):
    """Body of POST /mcp/tools/{tool_name}"""
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolCallRequest(ToolRequest):
    """Body of POST /mcp/call"""
    name: str


class ToolListResponse(BaseModel):
    tools: list[dict[str, Any]]


class ResourceListResponse(BaseModel):
    resources: list[dict[str, Any]] = Field(default_factory=list)


class PromptListResponse(BaseModel):
    prompts: list[dict[str, Any]] = Field(default_factory=list)
# endregion
