"""Cache client that turns backend calls into outcome variants.

Every public coroutine invokes the backend exactly once and returns exactly
one variant of its operation family (see ``cachedemo.models.outcomes``).
Nothing is raised for ordinary results: absence is a ``Miss`` and every
failure, whether a malformed request caught locally or an exception from
the backend, comes back as an ``Error`` carrying a message, an error code
and the original exception as cause.

No retries happen here.  A backend that retries does so inside its single
call.
"""

from __future__ import annotations

from collections.abc import Sequence
from types import TracebackType
from typing import Union

import structlog

from cachedemo.interfaces.cache_backend import ICacheBackend
from cachedemo.models.config import CacheConfig
from cachedemo.models.outcomes import (
    CacheDelete,
    CacheDeleteResponse,
    CacheGet,
    CacheGetResponse,
    CacheListConcatenateBack,
    CacheListConcatenateBackResponse,
    CacheListConcatenateFront,
    CacheListConcatenateFrontResponse,
    CacheListFetch,
    CacheListFetchResponse,
    CacheListPopBack,
    CacheListPopBackResponse,
    CacheListPopFront,
    CacheListPopFrontResponse,
    CacheListPushBack,
    CacheListPushBackResponse,
    CacheListPushFront,
    CacheListPushFrontResponse,
    CacheListRemoveValue,
    CacheListRemoveValueResponse,
    CacheSet,
    CacheSetResponse,
    ErrorDetail,
)
from cachedemo.utils.errors import CacheServiceError, ErrorCode

logger = structlog.get_logger(logger_name=__name__)

Key = Union[str, bytes]
Value = Union[str, bytes]


def _encode(item: object) -> bytes | None:
    """UTF-8 encode ``str``, pass ``bytes`` through, reject anything else."""
    if isinstance(item, bytes):
        return item
    if isinstance(item, str):
        return item.encode("utf-8")
    return None


def _invalid(message: str) -> ErrorDetail:
    return ErrorDetail(message=message, error_code=ErrorCode.INVALID_ARGUMENT_ERROR)


class CacheClient:
    """Async cache client returning typed outcomes.

    Parameters
    ----------
    backend:
        The remote boundary every operation is forwarded to.
    config:
        Supplies the default namespace and TTL.

    Usage::

        async with CacheClient(backend, config) as client:
            match await client.get("my_key"):
                case CacheGet.Hit() as hit:
                    print(hit.value_string)
                ...
    """

    def __init__(self, backend: ICacheBackend, config: CacheConfig) -> None:
        self._backend = backend
        self._config = config

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def backend(self) -> ICacheBackend:
        return self._backend

    async def close(self) -> None:
        await self._backend.close()

    async def __aenter__(self) -> CacheClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Request validation and error mapping
    # ------------------------------------------------------------------

    def _check_target(self, namespace: str | None, key: object) -> tuple[str, bytes] | ErrorDetail:
        """Resolve the namespace and encode the key, or explain why not."""
        resolved = self._config.namespace if namespace is None else namespace
        if not isinstance(resolved, str) or not resolved.strip():
            return _invalid("Namespace must be a non-empty string")
        encoded = _encode(key)
        if encoded is None:
            return _invalid(f"Key must be str or bytes, got {type(key).__name__}")
        if not encoded:
            return _invalid("Key must not be empty")
        return resolved, encoded

    def _failure(
        self, operation: str, namespace: str, key: bytes, exc: Exception
    ) -> ErrorDetail:
        """Describe a backend exception and log it."""
        if isinstance(exc, CacheServiceError):
            error_code = exc.error_code
        else:
            error_code = ErrorCode.UNKNOWN_ERROR
        message = str(exc).strip() or type(exc).__name__
        logger.warning(
            "cache_operation_failed",
            operation=operation,
            namespace=namespace,
            key=key.decode("utf-8", errors="replace"),
            provider=self._backend.get_provider_name(),
            error_code=error_code.value,
            error=message,
        )
        return ErrorDetail(message=message, error_code=error_code, cause=exc)

    def _rejected(self, operation: str, detail: ErrorDetail) -> ErrorDetail:
        logger.warning(
            "cache_request_rejected",
            operation=operation,
            error_code=detail.error_code.value,
            error=detail.message,
        )
        return detail

    # ------------------------------------------------------------------
    # Scalar operations
    # ------------------------------------------------------------------

    async def get(self, key: Key, *, namespace: str | None = None) -> CacheGetResponse:
        """Read the scalar stored under *key*."""
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheGet.Error(self._rejected("get", target))
        ns, raw_key = target

        try:
            value = await self._backend.get(ns, raw_key)
        except Exception as exc:  # noqa: BLE001
            return CacheGet.Error(self._failure("get", ns, raw_key, exc))

        if value is None:
            logger.debug("cache_get", namespace=ns, key=key, result="miss")
            return CacheGet.Miss()
        logger.debug("cache_get", namespace=ns, key=key, result="hit")
        return CacheGet.Hit(value)

    async def set(
        self,
        key: Key,
        value: Value,
        ttl_seconds: int | None = None,
        *,
        namespace: str | None = None,
    ) -> CacheSetResponse:
        """Store *value* under *key*.

        *ttl_seconds* defaults to the configured ``default_ttl_seconds``.
        """
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheSet.Error(self._rejected("set", target))
        ns, raw_key = target

        raw_value = _encode(value)
        if raw_value is None:
            return CacheSet.Error(
                self._rejected(
                    "set", _invalid(f"Value must be str or bytes, got {type(value).__name__}")
                )
            )
        ttl = self._config.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            return CacheSet.Error(
                self._rejected("set", _invalid(f"TTL must be positive, got {ttl}"))
            )

        try:
            await self._backend.set(ns, raw_key, raw_value, ttl)
        except Exception as exc:  # noqa: BLE001
            return CacheSet.Error(self._failure("set", ns, raw_key, exc))

        logger.debug("cache_set", namespace=ns, key=key, ttl=ttl)
        return CacheSet.Success()

    async def delete(self, key: Key, *, namespace: str | None = None) -> CacheDeleteResponse:
        """Remove *key*, scalar or list.  Deleting a missing key succeeds."""
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheDelete.Error(self._rejected("delete", target))
        ns, raw_key = target

        try:
            await self._backend.delete(ns, raw_key)
        except Exception as exc:  # noqa: BLE001
            return CacheDelete.Error(self._failure("delete", ns, raw_key, exc))

        logger.debug("cache_delete", namespace=ns, key=key)
        return CacheDelete.Success()

    # ------------------------------------------------------------------
    # List reads
    # ------------------------------------------------------------------

    async def list_fetch(self, key: Key, *, namespace: str | None = None) -> CacheListFetchResponse:
        """Read the whole list stored under *key*."""
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheListFetch.Error(self._rejected("list_fetch", target))
        ns, raw_key = target

        try:
            values = await self._backend.list_fetch(ns, raw_key)
        except Exception as exc:  # noqa: BLE001
            return CacheListFetch.Error(self._failure("list_fetch", ns, raw_key, exc))

        if values is None:
            logger.debug("cache_list_fetch", namespace=ns, key=key, result="miss")
            return CacheListFetch.Miss()
        logger.debug("cache_list_fetch", namespace=ns, key=key, result="hit", length=len(values))
        return CacheListFetch.Hit(tuple(values))

    async def list_pop_front(
        self, key: Key, *, namespace: str | None = None
    ) -> CacheListPopFrontResponse:
        """Remove and return the first element.  An empty or absent list is a Miss."""
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheListPopFront.Error(self._rejected("list_pop_front", target))
        ns, raw_key = target

        try:
            value = await self._backend.list_pop_front(ns, raw_key)
        except Exception as exc:  # noqa: BLE001
            return CacheListPopFront.Error(self._failure("list_pop_front", ns, raw_key, exc))

        if value is None:
            logger.debug("cache_list_pop_front", namespace=ns, key=key, result="miss")
            return CacheListPopFront.Miss()
        logger.debug("cache_list_pop_front", namespace=ns, key=key, result="hit")
        return CacheListPopFront.Hit(value)

    async def list_pop_back(
        self, key: Key, *, namespace: str | None = None
    ) -> CacheListPopBackResponse:
        """Remove and return the last element.  An empty or absent list is a Miss."""
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheListPopBack.Error(self._rejected("list_pop_back", target))
        ns, raw_key = target

        try:
            value = await self._backend.list_pop_back(ns, raw_key)
        except Exception as exc:  # noqa: BLE001
            return CacheListPopBack.Error(self._failure("list_pop_back", ns, raw_key, exc))

        if value is None:
            logger.debug("cache_list_pop_back", namespace=ns, key=key, result="miss")
            return CacheListPopBack.Miss()
        logger.debug("cache_list_pop_back", namespace=ns, key=key, result="hit")
        return CacheListPopBack.Hit(value)

    # ------------------------------------------------------------------
    # List writes
    # ------------------------------------------------------------------

    async def list_push_front(
        self, key: Key, value: Value, *, namespace: str | None = None
    ) -> CacheListPushFrontResponse:
        """Prepend *value* and report the new list length."""
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheListPushFront.Error(self._rejected("list_push_front", target))
        ns, raw_key = target
        raw_value = _encode(value)
        if raw_value is None:
            return CacheListPushFront.Error(
                self._rejected(
                    "list_push_front",
                    _invalid(f"Value must be str or bytes, got {type(value).__name__}"),
                )
            )

        try:
            length = await self._backend.list_push_front(ns, raw_key, raw_value)
        except Exception as exc:  # noqa: BLE001
            return CacheListPushFront.Error(self._failure("list_push_front", ns, raw_key, exc))

        logger.debug("cache_list_push_front", namespace=ns, key=key, list_length=length)
        return CacheListPushFront.Success(length)

    async def list_push_back(
        self, key: Key, value: Value, *, namespace: str | None = None
    ) -> CacheListPushBackResponse:
        """Append *value* and report the new list length."""
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheListPushBack.Error(self._rejected("list_push_back", target))
        ns, raw_key = target
        raw_value = _encode(value)
        if raw_value is None:
            return CacheListPushBack.Error(
                self._rejected(
                    "list_push_back",
                    _invalid(f"Value must be str or bytes, got {type(value).__name__}"),
                )
            )

        try:
            length = await self._backend.list_push_back(ns, raw_key, raw_value)
        except Exception as exc:  # noqa: BLE001
            return CacheListPushBack.Error(self._failure("list_push_back", ns, raw_key, exc))

        logger.debug("cache_list_push_back", namespace=ns, key=key, list_length=length)
        return CacheListPushBack.Success(length)

    def _encode_all(self, values: Sequence[Value]) -> list[bytes] | ErrorDetail:
        encoded: list[bytes] = []
        for index, value in enumerate(values):
            raw = _encode(value)
            if raw is None:
                return _invalid(
                    f"Value at index {index} must be str or bytes, got {type(value).__name__}"
                )
            encoded.append(raw)
        return encoded

    async def list_concatenate_front(
        self, key: Key, values: Sequence[Value], *, namespace: str | None = None
    ) -> CacheListConcatenateFrontResponse:
        """Prepend *values* in their given order.  An empty batch is forwarded as-is."""
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheListConcatenateFront.Error(self._rejected("list_concatenate_front", target))
        ns, raw_key = target
        raw_values = self._encode_all(values)
        if isinstance(raw_values, ErrorDetail):
            return CacheListConcatenateFront.Error(
                self._rejected("list_concatenate_front", raw_values)
            )

        try:
            length = await self._backend.list_concatenate_front(ns, raw_key, raw_values)
        except Exception as exc:  # noqa: BLE001
            return CacheListConcatenateFront.Error(
                self._failure("list_concatenate_front", ns, raw_key, exc)
            )

        logger.debug(
            "cache_list_concatenate_front",
            namespace=ns,
            key=key,
            added=len(raw_values),
            list_length=length,
        )
        return CacheListConcatenateFront.Success()

    async def list_concatenate_back(
        self, key: Key, values: Sequence[Value], *, namespace: str | None = None
    ) -> CacheListConcatenateBackResponse:
        """Append *values* in their given order.  An empty batch is forwarded as-is."""
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheListConcatenateBack.Error(self._rejected("list_concatenate_back", target))
        ns, raw_key = target
        raw_values = self._encode_all(values)
        if isinstance(raw_values, ErrorDetail):
            return CacheListConcatenateBack.Error(
                self._rejected("list_concatenate_back", raw_values)
            )

        try:
            length = await self._backend.list_concatenate_back(ns, raw_key, raw_values)
        except Exception as exc:  # noqa: BLE001
            return CacheListConcatenateBack.Error(
                self._failure("list_concatenate_back", ns, raw_key, exc)
            )

        logger.debug(
            "cache_list_concatenate_back",
            namespace=ns,
            key=key,
            added=len(raw_values),
            list_length=length,
        )
        return CacheListConcatenateBack.Success()

    async def list_remove_value(
        self, key: Key, value: Value, *, namespace: str | None = None
    ) -> CacheListRemoveValueResponse:
        """Remove every occurrence of *value*.  Absent values are not an error."""
        target = self._check_target(namespace, key)
        if isinstance(target, ErrorDetail):
            return CacheListRemoveValue.Error(self._rejected("list_remove_value", target))
        ns, raw_key = target
        raw_value = _encode(value)
        if raw_value is None:
            return CacheListRemoveValue.Error(
                self._rejected(
                    "list_remove_value",
                    _invalid(f"Value must be str or bytes, got {type(value).__name__}"),
                )
            )

        try:
            await self._backend.list_remove_value(ns, raw_key, raw_value)
        except Exception as exc:  # noqa: BLE001
            return CacheListRemoveValue.Error(self._failure("list_remove_value", ns, raw_key, exc))

        logger.debug("cache_list_remove_value", namespace=ns, key=key)
        return CacheListRemoveValue.Success()
