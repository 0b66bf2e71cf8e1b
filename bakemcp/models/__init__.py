"""Domain models for the generator pipeline."""

from bakemcp.models.domain import (
    MCPTool,
    MCPToolBody,
    MCPToolParam,
    Operation,
    Parameter,
    ParameterLocation,
    ParseResult,
    RequestBody,
)

__all__ = [
    "Operation",
    "Parameter",
    "ParameterLocation",
    "RequestBody",
    "ParseResult",
    "MCPTool",
    "MCPToolParam",
    "MCPToolBody",
]
