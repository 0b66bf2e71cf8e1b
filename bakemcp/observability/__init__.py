"""
Observability Package

Structured logging for the generator and the placeholder server.
"""

from bakemcp.observability.logging import (
    configure_logging,
    get_logger,
    reset_logging,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "reset_logging",
]
