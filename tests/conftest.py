"""
Pytest configuration for the bakemcp test suite.

This configuration sets up:
- Test discovery paths
- Test markers for categorization
- Shared fixtures: settings, fixture documents, generated-module loader,
  and a recording httpx transport
"""

import importlib.util
import sys
import uuid
from pathlib import Path
from types import ModuleType
from typing import Callable

import httpx
import pytest

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# =============================================================================
# Test Markers
# =============================================================================


def pytest_configure(config):
    """
    Register custom markers for test categorization.

    - unit: tests for individual components
    - integration: tests running the whole pipeline
    """
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: End-to-end pipeline tests")


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Keep BAKEMCP_* variables from the developer's shell out of the tests."""
    from bakemcp.core.config import get_settings

    for var in ("BAKEMCP_SERVER_NAME", "BAKEMCP_SERVER_VERSION", "BAKEMCP_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings():
    """Settings instance with the defaults the tests assert against."""
    from bakemcp.core.config import Settings

    return Settings(
        server_name="generated-mcp",
        server_version="1.0.0",
        http_timeout_seconds=30.0,
        log_level="WARNING",
    )


# =============================================================================
# Fixture Documents
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def minimal_spec_path() -> Path:
    return FIXTURES_DIR / "openapi3-minimal.json"


@pytest.fixture
def store_spec_path() -> Path:
    return FIXTURES_DIR / "openapi3-store.yaml"


@pytest.fixture
def store_spec_bytes(store_spec_path) -> bytes:
    return store_spec_path.read_bytes()


# =============================================================================
# Generated Server Loading
# =============================================================================


@pytest.fixture
def load_generated_server(monkeypatch) -> Callable[[Path], ModuleType]:
    """
    Import a generated server.py as a fresh module.

    BASE_URL and HTTP_TIMEOUT_SECONDS are cleared first so the generated
    defaults apply; tests set them explicitly when they need to.
    """
    monkeypatch.delenv("BASE_URL", raising=False)
    monkeypatch.delenv("HTTP_TIMEOUT_SECONDS", raising=False)
    loaded: list[str] = []

    def _load(server_py: Path) -> ModuleType:
        name = f"generated_server_{uuid.uuid4().hex}"
        spec = importlib.util.spec_from_file_location(name, server_py)
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        loaded.append(name)
        spec.loader.exec_module(module)
        return module

    yield _load

    for name in loaded:
        sys.modules.pop(name, None)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, status_code: int = 200, text: str = "ok") -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.text = text
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.text)


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def patch_client(monkeypatch):
    """Route a generated module's HTTP calls through a transport."""

    def _patch(module: ModuleType, transport: httpx.MockTransport) -> None:
        monkeypatch.setattr(
            module, "_client", lambda: httpx.AsyncClient(transport=transport)
        )

    return _patch
