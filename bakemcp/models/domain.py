"""
Domain Models - OpenAPI operations and the MCP tools derived from them

This module contains the models flowing through the generator pipeline:

    OpenAPI document -> ParseResult(Operation...) -> MCPTool... -> project files

Pattern: Domain models as value objects
Pattern: Pydantic for validation at the parser boundary
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


ParameterLocation = Literal["path", "query", "header"]


# =============================================================================
# OpenAPI Side
# =============================================================================


class Parameter(BaseModel):
    """
    An OpenAPI parameter (path, query or header).

    Attributes:
        name: Wire name of the parameter.
        location: Where the parameter is sent (OpenAPI ``in``).
        required: Whether callers must supply it.
        schema_: JSON Schema of the value (``schema`` in the document).
        description: Human-readable description.
    """

    name: str = Field(..., min_length=1)
    location: ParameterLocation
    required: bool = False
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")
    description: Optional[str] = None

    model_config = {"frozen": True, "populate_by_name": True}


class RequestBody(BaseModel):
    """An OpenAPI JSON request body."""

    required: bool = False
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")

    model_config = {"frozen": True, "populate_by_name": True}


class Operation(BaseModel):
    """
    One OpenAPI operation (path + method).

    Attributes:
        path: API path template (e.g. ``/users/{id}``).
        method: Upper-case HTTP method.
        operation_id: ``operationId`` if declared, else empty.
        summary: ``summary`` if declared, else empty.
        description: ``description`` if declared, else empty.
        parameters: Merged path-level and operation-level parameters.
        request_body: JSON request body, if any.
    """

    path: str
    method: str
    operation_id: str = ""
    summary: str = ""
    description: str = ""
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = None


class ParseResult(BaseModel):
    """
    Result of parsing an OpenAPI document.

    Attributes:
        operations: Operations in document order.
        base_url: First server URL without trailing slash ("" when none).
        title: ``info.title`` of the document.
        version: ``info.version`` of the document.
    """

    operations: list[Operation] = Field(default_factory=list)
    base_url: str = ""
    title: str = ""
    version: str = ""


# =============================================================================
# MCP Side
# =============================================================================


class MCPToolParam(BaseModel):
    """A tool argument that maps onto an HTTP parameter."""

    name: str
    location: ParameterLocation
    required: bool = False
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")
    description: Optional[str] = None

    model_config = {"populate_by_name": True}


class MCPToolBody(BaseModel):
    """The JSON body sent by a tool."""

    required: bool = False
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")

    model_config = {"populate_by_name": True}


class MCPTool(BaseModel):
    """
    An MCP tool derived from an OpenAPI operation.

    Attributes:
        name: Tool name, unique within a generated server.
        description: Tool description shown to MCP clients.
        input_schema: JSON Schema for the tool arguments.
        params: Path, query and header parameters.
        body: JSON request body, if any.
        method: Upper-case HTTP method.
        path: API path template.
        base_url: Default base URL of the API.

    Example:
        >>> tool = MCPTool(name="ping", description="GET /ping",
        ...                input_schema={"type": "object", "properties": {}},
        ...                method="GET", path="/ping")
    """

    name: str
    description: str
    input_schema: dict[str, Any]
    params: list[MCPToolParam] = Field(default_factory=list)
    body: Optional[MCPToolBody] = None
    method: str
    path: str
    base_url: str = ""

    def params_in(self, location: ParameterLocation) -> list[MCPToolParam]:
        """Return the parameters sent in ``location``, in declaration order."""
        return [p for p in self.params if p.location == location]
