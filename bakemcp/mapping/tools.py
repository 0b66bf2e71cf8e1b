"""
Operation to MCP Tool Mapping

Converts parsed OpenAPI operations into MCP tool descriptions: one tool per
operation, with unique and descriptive names.

Naming rules:
- ``operationId`` when present, snake_cased (``listProducts`` -> ``list_products``)
- otherwise ``<method>_<path>`` (``POST /items`` -> ``post_items``)
- operationIds with framework-generated numeric suffixes (``create_1``) and
  colliding names fall back to the path-based name
- anything still colliding gets ``_2``, ``_3``, ... appended
"""

import logging
import re
from collections import Counter
from typing import Any

from bakemcp.models.domain import MCPTool, MCPToolBody, MCPToolParam, Operation

logger = logging.getLogger(__name__)

_NON_IDENTIFIER = re.compile(r"[^a-zA-Z0-9_]+")

# Suffixes like _1, _2 appended by SpringDoc or Swagger Codegen when
# operationIds collide.
_NUMERIC_SUFFIX = re.compile(r"_\d+$")

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


# =============================================================================
# Naming
# =============================================================================


def sanitize_name(value: str) -> str:
    """
    Turn an arbitrary string into a snake_case tool name.

    Example:
        >>> sanitize_name("getProductById")
        'get_product_by_id'
    """
    value = _CAMEL_BOUNDARY.sub(r"\1_\2", value)
    value = _NON_IDENTIFIER.sub("_", value)
    value = value.strip("_").lower()
    return value or "op"


def path_to_name(path: str) -> str:
    path = path.strip("/")
    if not path:
        return ""
    path = path.replace("/", "_").replace("{", "").replace("}", "")
    return sanitize_name(path)


def path_based_name(op: Operation) -> str:
    """``<method>_<path>`` name, ignoring the operationId."""
    path_part = path_to_name(op.path).strip("_")
    method_part = op.method.lower()
    if not path_part:
        return method_part
    return f"{method_part}_{path_part}"


def tool_name(op: Operation) -> str:
    if op.operation_id:
        return sanitize_name(op.operation_id)
    return path_based_name(op)


# =============================================================================
# Schema
# =============================================================================


def build_input_schema(op: Operation) -> dict[str, Any]:
    """JSON Schema for the tool arguments: one property per parameter plus ``body``."""
    properties: dict[str, Any] = {}
    required: list[str] = []
    for param in op.parameters:
        properties[param.name] = param.schema_ or {}
        if param.required:
            required.append(param.name)
    if op.request_body is not None:
        properties["body"] = op.request_body.schema_ or {}
        if op.request_body.required:
            required.append("body")

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


# =============================================================================
# Mapping
# =============================================================================


def operation_to_mcp_tool(op: Operation, base_url: str) -> MCPTool:
    """
    Convert one OpenAPI operation to one MCP tool.

    Example:
        >>> op = Operation(path="/users/{id}", method="GET", operation_id="getUser")
        >>> operation_to_mcp_tool(op, "http://localhost:8080").name
        'get_user'
    """
    description = op.summary or op.description or f"{op.method} {op.path}"
    body = None
    if op.request_body is not None:
        body = MCPToolBody(required=op.request_body.required, schema=op.request_body.schema_)

    return MCPTool(
        name=tool_name(op),
        description=description,
        input_schema=build_input_schema(op),
        params=[
            MCPToolParam(
                name=p.name,
                location=p.location,
                required=p.required,
                schema=p.schema_,
                description=p.description,
            )
            for p in op.parameters
        ],
        body=body,
        method=op.method.upper(),
        path=op.path,
        base_url=base_url,
    )


def operations_to_mcp_tools(ops: list[Operation], base_url: str) -> list[MCPTool]:
    """
    Map each operation to one tool, ensuring unique and descriptive names.

    Pass 1 names every tool from its operationId (or path). Pass 2 replaces
    names that collide or carry a numeric suffix with the path-based name.
    Pass 3 appends ``_2``, ``_3``, ... to whatever still collides.
    """
    tools = [operation_to_mcp_tool(op, base_url) for op in ops]

    counts = Counter(tool.name for tool in tools)
    for tool, op in zip(tools, ops):
        if counts[tool.name] > 1 or _NUMERIC_SUFFIX.search(tool.name):
            fallback = path_based_name(op)
            logger.debug("renaming tool %s to %s", tool.name, fallback)
            tool.name = fallback

    seen: Counter[str] = Counter()
    for tool in tools:
        seen[tool.name] += 1
        if seen[tool.name] > 1:
            tool.name = f"{tool.name}_{seen[tool.name]}"

    return tools
