"""Apex API request building, transport and response handling."""

from apex_mcp.apex.client import ApexClient
from apex_mcp.apex.models import TextContent, ToolResult
from apex_mcp.apex.request import RequestSpec, build_request, encode_query_params, merge_headers
from apex_mcp.apex.response import decode_response, normalize_response

__all__ = [
    "ApexClient",
    "RequestSpec",
    "TextContent",
    "ToolResult",
    "build_request",
    "decode_response",
    "encode_query_params",
    "merge_headers",
    "normalize_response",
]
