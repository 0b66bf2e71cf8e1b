"""
Core module for bakemcp.

This module contains configuration, exceptions, and shared utilities.
"""

from bakemcp.core.config import Settings, get_settings
from bakemcp.core.exceptions import (
    BakeMCPException,
    ErrorCode,
    GenerationError,
    InputError,
    NoOperationsError,
    OpenAPIError,
    OutputDirectoryNotEmptyError,
    UnsupportedVersionError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "BakeMCPException",
    "InputError",
    "OpenAPIError",
    "UnsupportedVersionError",
    "NoOperationsError",
    "OutputDirectoryNotEmptyError",
    "GenerationError",
]
