"""
Project Generator - writes a standalone Python MCP server project

The generated project contains:
- pyproject.toml: installable project with a console script
- server.py: FastMCP server registering one tool per API operation
- README.md: how to run it and which tools it exposes

Every generated tool is an async function with keyword-only arguments.
FastMCP turns the signature into the tool's input schema; the body proxies
the HTTP call to the API through httpx.
"""

import json
import re
from pathlib import Path
from typing import NamedTuple, Optional

from bakemcp.core.config import Settings, get_settings
from bakemcp.core.exceptions import GenerationError
from bakemcp.generator.annotations import (
    MODULE_RESERVED,
    TypedDictRegistry,
    annotation_for,
    to_identifier,
)
from bakemcp.models.domain import MCPTool
from bakemcp.observability.logging import get_logger

logger = get_logger(__name__)

# mcp 2.x renamed FastMCP to MCPServer and dropped mcp.server.fastmcp.
MCP_REQUIREMENT = "mcp>=1.9,<2"
HTTPX_REQUIREMENT = "httpx>=0.27"
TYPING_EXTENSIONS_REQUIREMENT = "typing-extensions>=4.6"

READ_ONLY_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
IDEMPOTENT_METHODS = READ_ONLY_METHODS | {"PUT", "DELETE"}

_PATH_PARAM_RE = re.compile(r"\{([^}]+)\}")


# =============================================================================
# Argument Planning
# =============================================================================


class ToolArgument(NamedTuple):
    """One keyword-only argument of a generated tool function."""

    ident: str
    wire_name: str
    location: str  # path, query, header, field (flattened body property) or body
    required: bool
    annotation: str
    description: Optional[str]


def plan_arguments(
    tool: MCPTool,
    types: Optional[TypedDictRegistry] = None,
    hint: str = "",
) -> list[ToolArgument]:
    """
    Work out the function arguments of a tool, sorted by identifier.

    Object bodies with properties are flattened into one argument per
    property; a property clashing with a parameter becomes ``body_<name>``.
    Any other body is a single ``body`` argument. Nested object schemas are
    registered in ``types`` under names derived from ``hint``.
    """
    taken: set[str] = set()
    args: list[ToolArgument] = []
    for location in ("path", "query", "header"):
        for param in tool.params_in(location):
            args.append(
                ToolArgument(
                    ident=to_identifier(param.name, taken),
                    wire_name=param.name,
                    location=location,
                    required=param.required,
                    annotation=annotation_for(param.schema_, types, f"{hint}_{param.name}"),
                    description=param.description,
                )
            )

    if tool.body is not None:
        schema = tool.body.schema_ or {}
        properties = schema.get("properties")
        if isinstance(properties, dict) and properties:
            required = set(schema.get("required") or [])
            param_names = {p.name for p in tool.params}
            for name, prop in properties.items():
                prop = prop if isinstance(prop, dict) else {}
                base = f"body_{name}" if name in param_names else name
                args.append(
                    ToolArgument(
                        ident=to_identifier(base, taken),
                        wire_name=name,
                        location="field",
                        required=name in required,
                        annotation=annotation_for(prop, types, f"{hint}_{name}"),
                        description=prop.get("description"),
                    )
                )
        else:
            args.append(
                ToolArgument(
                    ident=to_identifier("body", taken),
                    wire_name="body",
                    location="body",
                    required=tool.body.required,
                    annotation=annotation_for(schema, types, f"{hint}_body"),
                    description=schema.get("description"),
                )
            )

    return sorted(args, key=lambda a: a.ident)


# =============================================================================
# server.py Rendering
# =============================================================================


def _signature_line(arg: ToolArgument) -> str:
    annotation = arg.annotation if arg.required else f"{arg.annotation} | None"
    if arg.description:
        annotation = f"Annotated[{annotation}, Field(description={arg.description!r})]"
    default = "" if arg.required else " = None"
    return f"    {arg.ident}: {annotation}{default},"


def build_url_expr(path: str, args: list[ToolArgument]) -> str:
    """
    Python expression for the request URL.

    Example:
        >>> build_url_expr("/users/{id}", [ToolArgument("id", "id", "path", True, "int", None)])
        "BASE_URL + '/users/' + quote(str(id), safe='')"
    """
    path_idents = {a.wire_name: a.ident for a in args if a.location == "path"}
    parts = ["BASE_URL"]
    pos = 0
    for match in _PATH_PARAM_RE.finditer(path):
        ident = path_idents.get(match.group(1))
        if ident is None:
            continue
        if match.start() > pos:
            parts.append(repr(path[pos : match.start()]))
        parts.append(f"quote(str({ident}), safe='')")
        pos = match.end()
    if pos < len(path):
        parts.append(repr(path[pos:]))
    return " + ".join(parts)


def _mapping_literal(args: list[ToolArgument]) -> str:
    return "{" + ", ".join(f"{a.wire_name!r}: {a.ident}" for a in args) + "}"


def build_call(tool: MCPTool, args: list[ToolArgument]) -> str:
    """Body of the tool function: one ``_call`` proxying the HTTP request."""
    lines = [
        "    return await _call(",
        f"        {tool.method!r},",
        f"        {build_url_expr(tool.path, args)},",
    ]
    query = [a for a in args if a.location == "query"]
    headers = [a for a in args if a.location == "header"]
    fields = [a for a in args if a.location == "field"]
    body = [a for a in args if a.location == "body"]
    if query:
        lines.append(f"        params={_mapping_literal(query)},")
    if headers:
        lines.append(f"        headers={_mapping_literal(headers)},")
    if fields:
        lines.append(f"        fields={_mapping_literal(fields)},")
    if body:
        lines.append(f"        json={body[0].ident},")
    lines.append("    )")
    return "\n".join(lines)


def build_annotations(method: str) -> str:
    hints = []
    if method in READ_ONLY_METHODS:
        hints.append("readOnlyHint=True")
    if method == "DELETE":
        hints.append("destructiveHint=True")
    if method in IDEMPOTENT_METHODS:
        hints.append("idempotentHint=True")
    hints.append("openWorldHint=True")
    return f"ToolAnnotations({', '.join(hints)})"


def tool_block(
    tool: MCPTool,
    function_name: str,
    types: Optional[TypedDictRegistry] = None,
) -> str:
    """Source of one registered tool function."""
    args = plan_arguments(tool, types, function_name)
    if args:
        signature = "\n".join(["    *,"] + [_signature_line(a) for a in args])
        header = f"async def {function_name}(\n{signature}\n) -> str:"
    else:
        header = f"async def {function_name}() -> str:"
    return (
        "@mcp.tool(\n"
        f"    name={tool.name!r},\n"
        f"    description={tool.description!r},\n"
        f"    annotations={build_annotations(tool.method)},\n"
        ")\n"
        f"{header}\n"
        f"{build_call(tool, args)}\n"
    )


_SERVER_PREAMBLE = '''"""MCP server generated by bakemcp: each tool proxies one API operation.

Environment:
    BASE_URL              base URL of the API
    HTTP_TIMEOUT_SECONDS  timeout for API calls in seconds
"""

import os
from typing import Annotated, Any, Literal
from urllib.parse import quote

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field
from typing_extensions import Required, TypedDict

BASE_URL = (os.environ.get("BASE_URL") or {base_url!r}).rstrip("/")
TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS") or {timeout!r})

mcp = FastMCP({server_name!r})


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=TIMEOUT_SECONDS)


def _present(values: dict[str, Any] | None) -> dict[str, Any] | None:
    if values is None:
        return None
    return {{k: v for k, v in values.items() if v is not None}}


async def _call(
    method: str,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, Any] | None = None,
    fields: dict[str, Any] | None = None,
    json: Any = None,
) -> str:
    if fields is not None:
        json = _present(fields)
    header_values = {{k: str(v) for k, v in (_present(headers) or {{}}).items()}}
    async with _client() as client:
        response = await client.request(
            method,
            url,
            params=_present(params),
            headers=header_values or None,
            json=json,
        )
    if not response.is_success:
        raise RuntimeError(f"HTTP {{response.status_code}}: {{response.text}}")
    return response.text
'''

_SERVER_FOOTER = '''

def main() -> None:
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
'''


def entry_script(tools: list[MCPTool], settings: Settings) -> str:
    """Render server.py for ``tools``."""
    base_url = tools[0].base_url if tools else ""
    parts = [
        _SERVER_PREAMBLE.format(
            base_url=base_url,
            timeout=settings.http_timeout_seconds,
            server_name=settings.server_name,
        )
    ]
    # Function and TypedDict names live in one module namespace.
    taken: set[str] = set()
    function_names = [to_identifier(tool.name, taken, MODULE_RESERVED) for tool in tools]
    types = TypedDictRegistry(taken)
    blocks = [tool_block(tool, name, types) for tool, name in zip(tools, function_names)]

    parts.extend("\n\n" + definition for definition in types.definitions)
    parts.extend("\n\n" + block for block in blocks)
    parts.append(_SERVER_FOOTER)
    return "".join(parts)


# =============================================================================
# pyproject.toml / README.md Rendering
# =============================================================================


def _toml_str(value: str) -> str:
    # JSON string escapes are valid TOML basic-string escapes
    return json.dumps(value)


def pyproject_toml(settings: Settings) -> str:
    name = _toml_str(settings.server_name)
    return (
        "[build-system]\n"
        'requires = ["setuptools>=68"]\n'
        'build-backend = "setuptools.build_meta"\n'
        "\n"
        "[project]\n"
        f"name = {name}\n"
        f"version = {_toml_str(settings.server_version)}\n"
        'description = "MCP server generated by bakemcp"\n'
        'requires-python = ">=3.10"\n'
        "dependencies = [\n"
        f"    {_toml_str(MCP_REQUIREMENT)},\n"
        f"    {_toml_str(HTTPX_REQUIREMENT)},\n"
        f"    {_toml_str(TYPING_EXTENSIONS_REQUIREMENT)},\n"
        "]\n"
        "\n"
        "[project.scripts]\n"
        f'{name} = "server:main"\n'
        "\n"
        "[tool.setuptools]\n"
        'py-modules = ["server"]\n'
    )


def readme(tools: list[MCPTool], settings: Settings, title: str = "") -> str:
    source = f" from the *{title}* OpenAPI document" if title else ""
    lines = [
        f"# {settings.server_name}",
        "",
        f"MCP server generated by bakemcp{source}.",
        "",
        "## Running",
        "",
        "```",
        "pip install .",
        f"BASE_URL={tools[0].base_url if tools else 'http://localhost:8080'} {settings.server_name}",
        "```",
        "",
        "## Tools",
        "",
        "| Tool | Operation | Description |",
        "| --- | --- | --- |",
    ]
    for tool in tools:
        description = tool.description.replace("|", "\\|").replace("\n", " ")
        lines.append(f"| `{tool.name}` | `{tool.method} {tool.path}` | {description} |")
    return "\n".join(lines) + "\n"


# =============================================================================
# Generate
# =============================================================================


def generate(
    out_dir: Path,
    tools: list[MCPTool],
    settings: Optional[Settings] = None,
    title: str = "",
) -> list[Path]:
    """
    Write the generated project into ``out_dir``.

    Existing files with the same names are overwritten; the caller decides
    whether a non-empty directory is acceptable.

    Returns:
        Paths of the written files.

    Raises:
        GenerationError: If the directory or a file cannot be written.
    """
    settings = settings or get_settings()
    files = {
        "pyproject.toml": (pyproject_toml(settings), 0o644),
        "server.py": (entry_script(tools, settings), 0o755),
        "README.md": (readme(tools, settings, title), 0o644),
    }

    written: list[Path] = []
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        for name, (content, mode) in files.items():
            path = out_dir / name
            path.write_text(content, encoding="utf-8")
            path.chmod(mode)
            written.append(path)
    except OSError as e:
        raise GenerationError(
            f"generation failed: {e}", path=getattr(e, "filename", None)
        ) from e

    logger.info("generated project", output_dir=str(out_dir), tools=len(tools))
    return written
