"""Custom exception hierarchy and error codes for cachedemo.

All application exceptions inherit from :class:`CacheDemoError`, which
carries an optional ``provider_name`` so error handlers can identify which
cache backend (e.g. "momento", "memory") caused the failure.

The hierarchy is organized by where the failure happens:

    CacheDemoError  (base -- catch-all for any cachedemo error)
    +-- ConfigurationError           (startup / missing config)
    +-- CacheServiceError            (raised by a cache backend)
        +-- CacheNotFoundError       (namespace does not exist)
        +-- FailedPreconditionError  (scalar/list type mismatch)
        +-- ProviderUnavailableError (transport failure / service down)

Backends raise :class:`CacheServiceError` subclasses; the cache client
(``cachedemo.services.cache_client``) catches them at the boundary and
turns them into ``Error`` outcome variants, so none of these cross into
caller code except :class:`ConfigurationError`.
"""

from enum import Enum


class ErrorCode(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Categories of cache failure.

    Member names match the hosted service's error codes so that SDK errors
    can be translated by name.
    """

    INVALID_ARGUMENT_ERROR = "INVALID_ARGUMENT_ERROR"
    NOT_FOUND_ERROR = "NOT_FOUND_ERROR"
    ALREADY_EXISTS_ERROR = "ALREADY_EXISTS_ERROR"
    FAILED_PRECONDITION_ERROR = "FAILED_PRECONDITION_ERROR"
    BAD_REQUEST_ERROR = "BAD_REQUEST_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    LIMIT_EXCEEDED_ERROR = "LIMIT_EXCEEDED_ERROR"
    CANCELLED_ERROR = "CANCELLED_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    SERVER_UNAVAILABLE = "SERVER_UNAVAILABLE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    CLIENT_RESOURCE_EXHAUSTED = "CLIENT_RESOURCE_EXHAUSTED"
    UNKNOWN_SERVICE_ERROR = "UNKNOWN_SERVICE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class CacheDemoError(Exception):
    """Base exception for all cachedemo errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which backend triggered the error.  The
    ``__str__`` method prefixes the provider name in brackets for log
    output, e.g. ``[momento] Request timed out``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class ConfigurationError(CacheDemoError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Backend errors
# ---------------------------------------------------------------------------

class CacheServiceError(CacheDemoError):
    """Raised by a cache backend when an operation fails.

    Carries an :class:`ErrorCode` in addition to the message so the client
    can report the failure category on the ``Error`` outcome.
    """

    default_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str = "Cache operation failed",
        provider_name: str | None = None,
        error_code: ErrorCode | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._error_code = error_code or self.default_code

    @property
    def error_code(self) -> ErrorCode:
        return self._error_code


class CacheNotFoundError(CacheServiceError):
    """Raised when the requested namespace does not exist on the backend."""

    default_code = ErrorCode.NOT_FOUND_ERROR

    def __init__(
        self,
        message: str = "Cache not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class FailedPreconditionError(CacheServiceError):
    """Raised when a list operation targets a scalar key or vice versa."""

    default_code = ErrorCode.FAILED_PRECONDITION_ERROR

    def __init__(
        self,
        message: str = "Operation does not match the stored value type",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderUnavailableError(CacheServiceError):
    """Raised when the cache service is unreachable."""

    default_code = ErrorCode.SERVER_UNAVAILABLE

    def __init__(
        self,
        message: str = "Cache service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
