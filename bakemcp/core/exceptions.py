"""
Custom exceptions for bakemcp.

This module provides the exception hierarchy used by the generator pipeline.
All exceptions inherit from BakeMCPException and carry both an error code
(for logging) and the process exit code the CLI reports for them.

Exit codes:
- 1: invalid OpenAPI, unsupported version, generation failure
- 2: input cannot be read
- 3: output directory not empty
- 4: no mappable operations
"""

from enum import Enum
from typing import Any


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for bakemcp exceptions.

    These codes provide a consistent way to identify error types in logs.
    """

    BAKEMCP_ERROR = "BAKEMCP_ERROR"
    INPUT_ERROR = "INPUT_ERROR"
    OPENAPI_ERROR = "OPENAPI_ERROR"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    NO_OPERATIONS = "NO_OPERATIONS"
    OUTPUT_NOT_EMPTY = "OUTPUT_NOT_EMPTY"
    GENERATION_ERROR = "GENERATION_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class BakeMCPException(Exception):
    """
    Base exception for all bakemcp errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
        exit_code: Process exit code reported by the CLI.
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.BAKEMCP_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# InputError
# =============================================================================


class InputError(BakeMCPException):
    """
    Exception for unreadable input documents.

    Raised when the OpenAPI input file does not exist, cannot be read,
    or cannot be fetched from its URL.

    Attributes:
        source: The path or URL that was requested.
    """

    exit_code = 2

    def __init__(
        self,
        message: str,
        source: str,
        error_code: str = ErrorCode.INPUT_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.source = source


# =============================================================================
# OpenAPIError / UnsupportedVersionError
# =============================================================================


class OpenAPIError(BakeMCPException):
    """
    Exception for documents that are not valid OpenAPI 3.x.

    Attributes:
        pointer: JSON pointer of the offending node (if known).
    """

    exit_code = 1

    def __init__(
        self,
        message: str,
        pointer: str | None = None,
        error_code: str = ErrorCode.OPENAPI_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.pointer = pointer


class UnsupportedVersionError(OpenAPIError):
    """Raised for OpenAPI 2.0 (Swagger) documents."""

    def __init__(
        self,
        message: str = "OpenAPI 2.0 is not supported; use OpenAPI 3.x",
        version: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code=ErrorCode.UNSUPPORTED_VERSION, **kwargs)
        self.version = version


# =============================================================================
# NoOperationsError
# =============================================================================


class NoOperationsError(BakeMCPException):
    """Raised when the document declares no operations to map to tools."""

    exit_code = 4

    def __init__(
        self,
        message: str = "no mappable operations found in OpenAPI spec",
        error_code: str = ErrorCode.NO_OPERATIONS,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)


# =============================================================================
# OutputDirectoryNotEmptyError
# =============================================================================


class OutputDirectoryNotEmptyError(BakeMCPException):
    """
    Raised when the output directory has content and --force was not given.

    Attributes:
        output_dir: The directory that was checked.
    """

    exit_code = 3

    def __init__(
        self,
        output_dir: str,
        message: str = "output directory is not empty; use --force to overwrite",
        error_code: str = ErrorCode.OUTPUT_NOT_EMPTY,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.output_dir = output_dir


# =============================================================================
# GenerationError
# =============================================================================


class GenerationError(BakeMCPException):
    """
    Raised when the generated project cannot be written.

    Attributes:
        path: File that failed to be written (if known).
    """

    exit_code = 1

    def __init__(
        self,
        message: str,
        path: str | None = None,
        error_code: str = ErrorCode.GENERATION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.path = path
