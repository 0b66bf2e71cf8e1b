"""
Core configuration module for bakemcp.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the BAKEMCP_ prefix.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the BAKEMCP_ prefix for environment variables.
    Example: BAKEMCP_SERVER_NAME=orders-mcp
    """

    # =========================================================================
    # Generated Server Identity
    # =========================================================================
    server_name: str = Field(
        default="generated-mcp",
        min_length=1,
        description="Name of the MCP server and of the generated project",
    )
    server_version: str = Field(
        default="1.0.0",
        description="Version written into the generated project",
    )

    # =========================================================================
    # HTTP Configuration
    # =========================================================================
    http_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=600.0,
        description="Timeout for OpenAPI document fetches and generated tool calls",
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Minimum log level written to stderr",
    )
    json_logs: bool = Field(
        default=False,
        description="Render log lines as JSON instead of console key=value",
    )

    # =========================================================================
    # Environment Prefix Configuration
    # =========================================================================
    model_config = {
        "env_prefix": "BAKEMCP_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        """Server names end up in pyproject.toml, so whitespace is rejected."""
        if any(ch.isspace() for ch in v):
            raise ValueError("Server name must not contain whitespace")
        return v


# =============================================================================
# Settings Singleton
# =============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.
    Tests call ``get_settings.cache_clear()`` after changing the environment.

    Returns:
        Settings: The application settings instance.
    """
    return Settings()
