"""bakemcp - OpenAPI to MCP server generator.

Usage and configuration are described in README.md.

Note: Import the placeholder server directly from `bakemcp.server`; importing
it here would construct the MCP server on every package import.
"""

__version__ = "0.1.0"

__all__ = ["__version__", "cli", "core", "models", "server"]
