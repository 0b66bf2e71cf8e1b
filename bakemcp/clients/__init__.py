"""
Clients Package

HTTP client factory and OpenAPI document fetching.
"""

from bakemcp.clients.http import create_http_client, fetch_document, is_url

__all__ = [
    "create_http_client",
    "fetch_document",
    "is_url",
]
