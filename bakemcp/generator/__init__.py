"""
Generator Package

Turns mapped MCP tools into a standalone Python MCP server project.
"""

from bakemcp.generator.project import generate

__all__ = ["generate"]
