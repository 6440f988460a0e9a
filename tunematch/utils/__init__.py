"""Utility modules for TuneMatch.

- **errors** -- Domain exception hierarchy rooted at TuneMatchError; each
  class carries a ``retryable`` flag so callers can tell a rejected request
  from a transient failure.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from tunematch.utils.errors import (
    ConfigurationError,
    ConflictError,
    ExternalSourceError,
    NotFoundError,
    StoreError,
    TuneMatchError,
    ValidationError,
)
from tunematch.utils.logging import configure_logging, configure_logging_from_config, get_logger

__all__ = [
    "ConfigurationError",
    "ConflictError",
    "ExternalSourceError",
    "NotFoundError",
    "StoreError",
    "TuneMatchError",
    "ValidationError",
    "configure_logging",
    "configure_logging_from_config",
    "get_logger",
]
