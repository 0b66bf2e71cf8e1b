"""
HTTP Client Module

This module provides the HTTP client factory used to fetch OpenAPI documents
given by URL, with connection pooling, timeouts, and connection retries.

Pattern: Factory pattern for creating configured HTTP clients
"""

from typing import Optional

import httpx

from bakemcp import __version__
from bakemcp.core.exceptions import InputError


# =============================================================================
# Default Configuration Constants
# =============================================================================


DEFAULT_TIMEOUT_SECONDS: float = 30.0
"""Default timeout for HTTP requests in seconds."""

DEFAULT_MAX_CONNECTIONS: int = 10
"""Maximum number of connections in the pool."""

DEFAULT_RETRY_COUNT: int = 3
"""Default number of connection-level retries."""


# =============================================================================
# HTTP Client Factory
# =============================================================================


def create_http_client(
    timeout_seconds: Optional[float] = None,
    max_connections: Optional[int] = None,
    retries: Optional[int] = None,
    headers: Optional[dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create a configured HTTP client with connection pooling and timeouts.

    Args:
        timeout_seconds: Request timeout in seconds (default: 30.0)
        max_connections: Maximum connections in pool (default: 10)
        retries: Number of connection retries (default: 3)
        headers: Additional headers to include in all requests
        transport: Transport override (tests pass httpx.MockTransport)

    Returns:
        httpx.AsyncClient: Configured async HTTP client

    Example:
        >>> async with create_http_client(timeout_seconds=10.0) as client:
        ...     response = await client.get("https://api.example.com/openapi.json")
    """
    timeout = timeout_seconds if timeout_seconds is not None else DEFAULT_TIMEOUT_SECONDS
    max_conn = max_connections if max_connections is not None else DEFAULT_MAX_CONNECTIONS
    retry_count = retries if retries is not None else DEFAULT_RETRY_COUNT

    default_headers = {
        "User-Agent": f"bakemcp/{__version__}",
        "Accept": "application/json, application/yaml;q=0.9, */*;q=0.8",
    }
    if headers:
        default_headers.update(headers)

    if transport is None:
        # httpx transport retries are connection-level retries only
        transport = httpx.AsyncHTTPTransport(
            retries=retry_count,
            limits=httpx.Limits(max_connections=max_conn),
        )

    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        headers=default_headers,
        transport=transport,
        follow_redirects=True,
    )


# =============================================================================
# Document Fetch
# =============================================================================


def is_url(source: str) -> bool:
    """Return True when ``source`` is an http(s) URL rather than a file path."""
    return source.lower().startswith(("http://", "https://"))


async def fetch_document(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout_seconds: Optional[float] = None,
) -> bytes:
    """
    Download an OpenAPI document.

    Args:
        url: http(s) URL of the document.
        client: Client to use; a new one is created and closed otherwise.
        timeout_seconds: Timeout for a newly created client.

    Returns:
        The raw document bytes.

    Raises:
        InputError: On transport failures and non-2xx responses.
    """
    owns_client = client is None
    if client is None:
        client = create_http_client(timeout_seconds=timeout_seconds)
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        raise InputError(f"cannot fetch input: {e}", source=url) from e
    finally:
        if owns_client:
            await client.aclose()

    if not response.is_success:
        raise InputError(
            f"cannot fetch input: HTTP {response.status_code} from {url}",
            source=url,
            status_code=response.status_code,
        )
    return response.content
