"""
Unit tests for bakemcp/core/config.py - Settings Class and Singleton.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError


class TestSettingsClassExists:
    """Settings class creation."""

    def test_settings_extends_base_settings(self):
        """Settings is a pydantic-settings BaseSettings."""
        from pydantic_settings import BaseSettings

        from bakemcp.core.config import Settings

        assert issubclass(Settings, BaseSettings)


class TestSettingsDefaults:
    """Default values used by the generator and the placeholder server."""

    def test_default_server_name(self):
        """The placeholder server and generated project are named generated-mcp."""
        from bakemcp.core.config import Settings

        assert Settings().server_name == "generated-mcp"

    def test_default_server_version(self):
        from bakemcp.core.config import Settings

        assert Settings().server_version == "1.0.0"

    def test_default_timeout(self):
        from bakemcp.core.config import Settings

        assert Settings().http_timeout_seconds == 30.0

    def test_default_log_level_keeps_cli_quiet(self):
        from bakemcp.core.config import Settings

        settings = Settings()
        assert settings.log_level == "WARNING"
        assert settings.json_logs is False


class TestSettingsEnvironment:
    """Loading from BAKEMCP_* environment variables."""

    def test_env_prefix_applies(self):
        from bakemcp.core.config import Settings

        with patch.dict(os.environ, {"BAKEMCP_SERVER_NAME": "orders-mcp"}):
            assert Settings().server_name == "orders-mcp"

    def test_env_is_case_insensitive(self):
        from bakemcp.core.config import Settings

        with patch.dict(os.environ, {"bakemcp_http_timeout_seconds": "12.5"}):
            assert Settings().http_timeout_seconds == 12.5

    def test_log_level_is_normalized(self):
        from bakemcp.core.config import Settings

        with patch.dict(os.environ, {"BAKEMCP_LOG_LEVEL": "debug"}):
            assert Settings().log_level == "DEBUG"


class TestSettingsValidation:
    """Field validators."""

    def test_rejects_unknown_log_level(self):
        from bakemcp.core.config import Settings

        with pytest.raises(ValidationError):
            Settings(log_level="VERBOSE")

    def test_rejects_server_name_with_whitespace(self):
        from bakemcp.core.config import Settings

        with pytest.raises(ValidationError):
            Settings(server_name="my server")

    def test_rejects_empty_server_name(self):
        from bakemcp.core.config import Settings

        with pytest.raises(ValidationError):
            Settings(server_name="")

    def test_rejects_timeout_out_of_range(self):
        from bakemcp.core.config import Settings

        with pytest.raises(ValidationError):
            Settings(http_timeout_seconds=0.1)


class TestSettingsSingleton:
    """get_settings() caching."""

    def test_get_settings_returns_same_instance(self):
        from bakemcp.core.config import get_settings

        assert get_settings() is get_settings()

    def test_cache_clear_picks_up_environment(self):
        from bakemcp.core.config import get_settings

        with patch.dict(os.environ, {"BAKEMCP_SERVER_NAME": "inventory-mcp"}):
            get_settings.cache_clear()
            assert get_settings().server_name == "inventory-mcp"
