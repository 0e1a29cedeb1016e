"""
Tool catalog registration.

Importing this package registers the tweet and list tools, in that order.
"""

from apex_mcp.tools import tweet  # noqa: F401
from apex_mcp.tools import lists  # noqa: F401
from apex_mcp.tools.registry import ToolRegistry, catalog, register_tool

__all__ = ["ToolRegistry", "catalog", "register_tool"]
