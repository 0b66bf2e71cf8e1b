"""OpenAPI operation to MCP tool mapping."""

from bakemcp.mapping.tools import (
    operation_to_mcp_tool,
    operations_to_mcp_tools,
    sanitize_name,
)

__all__ = [
    "operation_to_mcp_tool",
    "operations_to_mcp_tools",
    "sanitize_name",
]
