"""Utility modules for cachedemo.

- **errors** -- Exception hierarchy rooted at CacheDemoError plus the
  ErrorCode enumeration shared by backends and outcome variants.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from cachedemo.utils.errors import (
    CacheDemoError,
    CacheNotFoundError,
    CacheServiceError,
    ConfigurationError,
    ErrorCode,
    FailedPreconditionError,
    ProviderUnavailableError,
)
from cachedemo.utils.logging import configure_logging, get_logger

__all__ = [
    "CacheDemoError",
    "CacheNotFoundError",
    "CacheServiceError",
    "ConfigurationError",
    "ErrorCode",
    "FailedPreconditionError",
    "ProviderUnavailableError",
    "configure_logging",
    "get_logger",
]
