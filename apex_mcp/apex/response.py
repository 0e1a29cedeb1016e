"""
Response normalization for Apex API calls.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from apex_mcp.apex.models import ToolResult
from apex_mcp.errors import ApexMCPError, RemoteAPIError, TransportError


EMPTY_SUCCESS: dict[str, Any] = {"success": True}


def decode_response(response: httpx.Response) -> Any:
    """
    Decode an Apex API response

    Returns:
        Parsed JSON payload, or {"success": True} for empty bodies

    Raises:
        RemoteAPIError: non-2xx status
        TransportError: body is not valid JSON
    """
    if not response.is_success:
        raise RemoteAPIError(response.status_code, response.reason_phrase)

    if response.headers.get("content-length") == "0" or response.status_code == 204:
        return dict(EMPTY_SUCCESS)

    text = response.text
    if not text:
        return dict(EMPTY_SUCCESS)
    try:
        return json.loads(text)
    except ValueError as exc:
        raise TransportError(f"Invalid JSON response: {exc}") from exc


def normalize_response(response: httpx.Response) -> ToolResult:
    try:
        return ToolResult.from_data(decode_response(response))
    except ApexMCPError as exc:
        return ToolResult.from_error(exc)
