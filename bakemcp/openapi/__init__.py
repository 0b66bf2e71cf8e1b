"""OpenAPI 3.x document parsing."""

from bakemcp.openapi.parser import RefResolver, load_document, parse

__all__ = ["RefResolver", "load_document", "parse"]
