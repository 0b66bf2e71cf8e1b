"""
bakemcp command line interface.

    bakemcp generate openapi.yaml -o ./my-mcp [--force]
    bakemcp serve
    bakemcp --version

Errors go to stderr and map to exit codes (see bakemcp.core.exceptions).
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from bakemcp import __version__
from bakemcp.core.config import get_settings
from bakemcp.core.exceptions import BakeMCPException
from bakemcp.observability.logging import configure_logging, get_logger
from bakemcp.services.bake import BakeRequest, bake

app = typer.Typer(
    help="Generate MCP servers from OpenAPI 3.x documents.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"bakemcp {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print version and exit.",
    ),
) -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs, force=True)


@app.command()
def generate(
    input: str = typer.Argument(..., help="Path or URL of an OpenAPI 3.x file (JSON or YAML)."),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output directory (default: current directory)."
    ),
    force: bool = typer.Option(
        False, "-f", "--force", help="Overwrite files in a non-empty output directory."
    ),
) -> None:
    """Generate a Python MCP server project with one tool per API operation."""
    logger = get_logger(__name__)
    request = BakeRequest(input=input, output_dir=output, force=force)
    try:
        result = asyncio.run(bake(request))
    except BakeMCPException as e:
        logger.debug("bake failed", error_code=str(e.error_code), exit_code=e.exit_code)
        typer.echo(e.message, err=True)
        raise typer.Exit(code=e.exit_code)

    typer.echo(f"Generated {len(result.tools)} tools in {result.output_dir}")


@app.command()
def serve() -> None:
    """Run the placeholder MCP server on stdio."""
    from bakemcp.server import main as run_server

    run_server()


if __name__ == "__main__":
    app()
