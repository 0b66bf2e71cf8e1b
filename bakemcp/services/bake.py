"""
Bake Service - OpenAPI document in, MCP server project out

Runs the whole pipeline in the order that decides the reported error:

1. read the input (file or URL)          -> InputError (exit 2)
2. parse the OpenAPI document            -> OpenAPIError (exit 1)
3. require at least one operation        -> NoOperationsError (exit 4)
4. check the output directory            -> OutputDirectoryNotEmptyError (exit 3)
5. map operations to tools and generate  -> GenerationError (exit 1)
"""

from pathlib import Path
from typing import Optional
from urllib.parse import urljoin, urlsplit

from pydantic import BaseModel, Field

from bakemcp.clients.http import fetch_document, is_url
from bakemcp.core.config import Settings, get_settings
from bakemcp.core.exceptions import (
    GenerationError,
    InputError,
    NoOperationsError,
    OutputDirectoryNotEmptyError,
)
from bakemcp.generator.project import generate
from bakemcp.mapping.tools import operations_to_mcp_tools
from bakemcp.models.domain import MCPTool
from bakemcp.observability.logging import get_logger
from bakemcp.openapi.parser import parse

logger = get_logger(__name__)


class BakeRequest(BaseModel):
    """
    Parsed CLI arguments.

    Attributes:
        input: Path or http(s) URL of the OpenAPI document.
        output_dir: Target directory (default: current directory).
        force: Write into a non-empty output directory.
    """

    input: str = Field(..., min_length=1)
    output_dir: Optional[Path] = None
    force: bool = False


class BakeResult(BaseModel):
    """Outcome of a successful bake."""

    output_dir: Path
    tools: list[MCPTool]
    files: list[Path]


# =============================================================================
# Steps
# =============================================================================


async def read_input(source: str, settings: Settings) -> bytes:
    """Read the OpenAPI document from a file path or an http(s) URL."""
    if is_url(source):
        return await fetch_document(source, timeout_seconds=settings.http_timeout_seconds)

    path = Path(source)
    try:
        return path.read_bytes()
    except FileNotFoundError as e:
        raise InputError(f"input file not found: {source}", source=source) from e
    except OSError as e:
        raise InputError(f"cannot read input: {e}", source=source) from e


def resolve_base_url(base_url: str, source: str) -> str:
    """
    Resolve a relative server URL (e.g. ``/api/v3``) against the URL the
    document was fetched from. File inputs keep the URL as declared.
    """
    if not base_url or not is_url(source) or urlsplit(base_url).scheme:
        return base_url
    return urljoin(source, base_url).rstrip("/")


def prepare_output_dir(output_dir: Path, force: bool) -> None:
    """Create ``output_dir`` if missing; refuse a non-empty one unless forced."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise GenerationError(
            f"cannot create output directory: {e}", path=str(output_dir)
        ) from e
    if not force and any(output_dir.iterdir()):
        raise OutputDirectoryNotEmptyError(str(output_dir))


# =============================================================================
# Pipeline
# =============================================================================


async def bake(request: BakeRequest, settings: Optional[Settings] = None) -> BakeResult:
    """
    Generate an MCP server project from an OpenAPI document.

    Raises:
        BakeMCPException: A subclass whose ``exit_code`` the CLI reports.

    Example:
        >>> result = await bake(BakeRequest(input="openapi.yaml", output_dir=Path("out")))
        >>> [t.name for t in result.tools]
        ['ping']
    """
    settings = settings or get_settings()
    output_dir = request.output_dir or Path.cwd()

    data = await read_input(request.input, settings)
    parsed = parse(data)
    base_url = resolve_base_url(parsed.base_url, request.input)
    logger.info(
        "parsed openapi document",
        source=request.input,
        operations=len(parsed.operations),
        base_url=base_url,
    )
    if not parsed.operations:
        raise NoOperationsError()

    prepare_output_dir(output_dir, request.force)

    tools = operations_to_mcp_tools(parsed.operations, base_url)
    files = generate(output_dir, tools, settings=settings, title=parsed.title)
    return BakeResult(output_dir=output_dir, tools=tools, files=files)
