"""
Exception hierarchy for the Apex MCP server.

Only ConfigurationError is allowed to stop the process. Everything raised
while a tool runs is turned into an error ToolResult by the registry.
"""

from __future__ import annotations

from typing import Any


# region Base
class ApexMCPError(Exception):
    """Base error"""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message
# endregion


# region Startup
class ConfigurationError(ApexMCPError):
    """Missing or invalid configuration, fatal at startup"""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONFIG_ERROR")
# endregion


# region Tool call
class ToolNotFoundError(ApexMCPError):
    def __init__(self, tool_name: str) -> None:
        super().__init__(
            message=f"Tool '{tool_name}' not found",
            code="TOOL_NOT_FOUND",
            details={"tool": tool_name},
        )
        self.tool_name = tool_name


class ToolValidationError(ApexMCPError):
    """Arguments rejected by the tool's input schema"""

    def __init__(self, tool_name: str, errors: list[dict[str, Any]]) -> None:
        fields = ", ".join(
            ".".join(str(part) for part in error.get("loc", ())) or "<root>"
            for error in errors
        )
        super().__init__(
            message=f"Invalid arguments for tool '{tool_name}': {fields}",
            code="VALIDATION_ERROR",
            details={"tool": tool_name, "errors": errors},
        )
        self.tool_name = tool_name
        self.errors = errors


class RemoteAPIError(ApexMCPError):
    """Non-2xx response from the Apex API"""

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(
            message=f"API request failed ({status_code}): {reason}",
            code="REMOTE_API_ERROR",
            details={"status_code": status_code, "reason": reason},
        )
        self.status_code = status_code
        self.reason = reason


class TransportError(ApexMCPError):
    """Network failure, timeout or unreadable response body"""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="TRANSPORT_ERROR")
# endregion
