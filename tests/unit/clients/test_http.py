"""
Tests for the HTTP client factory and OpenAPI document fetching.
"""

import httpx
import pytest


class TestCreateHTTPClient:
    """Tests for create_http_client factory function."""

    def test_returns_async_client(self) -> None:
        from bakemcp.clients.http import create_http_client

        client = create_http_client()
        assert isinstance(client, httpx.AsyncClient)

    def test_default_timeout(self) -> None:
        from bakemcp.clients.http import DEFAULT_TIMEOUT_SECONDS, create_http_client

        client = create_http_client()
        assert client.timeout.read == DEFAULT_TIMEOUT_SECONDS
        assert client.timeout.connect == DEFAULT_TIMEOUT_SECONDS

    def test_custom_timeout(self) -> None:
        from bakemcp.clients.http import create_http_client

        client = create_http_client(timeout_seconds=5.0)
        assert client.timeout.read == 5.0

    def test_user_agent_names_bakemcp(self) -> None:
        from bakemcp import __version__
        from bakemcp.clients.http import create_http_client

        client = create_http_client()
        assert client.headers["User-Agent"] == f"bakemcp/{__version__}"

    def test_extra_headers_are_merged(self) -> None:
        from bakemcp.clients.http import create_http_client

        client = create_http_client(headers={"Authorization": "Bearer t"})
        assert client.headers["Authorization"] == "Bearer t"
        assert "User-Agent" in client.headers


class TestIsURL:
    @pytest.mark.parametrize(
        "source, expected",
        [
            ("http://localhost:8080/openapi.json", True),
            ("HTTPS://example.com/spec.yaml", True),
            ("openapi.yaml", False),
            ("/tmp/http/spec.json", False),
        ],
    )
    def test_is_url(self, source, expected) -> None:
        from bakemcp.clients.http import is_url

        assert is_url(source) is expected


class TestFetchDocument:
    """Tests for fetch_document."""

    @pytest.mark.asyncio
    async def test_returns_body_bytes(self) -> None:
        from bakemcp.clients.http import create_http_client, fetch_document

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url == "https://api.example.com/openapi.json"
            return httpx.Response(200, content=b'{"openapi": "3.0.0"}')

        async with create_http_client(transport=httpx.MockTransport(handler)) as client:
            data = await fetch_document("https://api.example.com/openapi.json", client=client)

        assert data == b'{"openapi": "3.0.0"}'

    @pytest.mark.asyncio
    async def test_non_2xx_raises_input_error(self) -> None:
        from bakemcp.clients.http import create_http_client, fetch_document
        from bakemcp.core.exceptions import InputError

        transport = httpx.MockTransport(lambda request: httpx.Response(404, text="missing"))
        async with create_http_client(transport=transport) as client:
            with pytest.raises(InputError) as exc_info:
                await fetch_document("https://api.example.com/openapi.json", client=client)

        assert "HTTP 404" in exc_info.value.message
        assert exc_info.value.status_code == 404
        assert exc_info.value.exit_code == 2

    @pytest.mark.asyncio
    async def test_transport_error_raises_input_error(self) -> None:
        from bakemcp.clients.http import create_http_client, fetch_document
        from bakemcp.core.exceptions import InputError

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with create_http_client(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(InputError) as exc_info:
                await fetch_document("http://localhost:1/openapi.json", client=client)

        assert exc_info.value.message.startswith("cannot fetch input:")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
