"""In-process cache backend using cachetools.TLRUCache.

Lets the demo and the test-suite run without network access or a
credential.  Entries are keyed by ``(namespace, key)`` and expire after
their own TTL; lists are stored as tuples and rewritten on every change,
which also refreshes their TTL.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import structlog
from cachetools import TLRUCache

from cachedemo.interfaces.cache_backend import ICacheBackend
from cachedemo.utils.errors import (
    CacheNotFoundError,
    FailedPreconditionError,
    ProviderUnavailableError,
)

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "memory"


@dataclass(frozen=True)
class _Entry:
    value: bytes | tuple[bytes, ...]
    ttl_seconds: float


def _entry_expiry(_key: tuple[str, bytes], entry: _Entry, now: float) -> float:
    return now + entry.ttl_seconds


class MemoryCacheBackend(ICacheBackend):
    """In-memory namespaced cache backed by ``cachetools.TLRUCache``.

    Parameters
    ----------
    max_size:
        Maximum number of keys (scalars and lists together) before the
        least-recently-used one is evicted.
    default_ttl:
        TTL in seconds applied to list writes.
    namespaces:
        Names of the caches that exist.  Operations on any other namespace
        fail with ``NOT_FOUND_ERROR``, as the hosted service does for a
        missing cache.  ``None`` accepts every namespace.
    timer:
        Clock used for expiry; tests pass a fake one.
    """

    def __init__(
        self,
        max_size: int = 10_000,
        default_ttl: int = 300,
        namespaces: Iterable[str] | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl
        self._namespaces = frozenset(namespaces) if namespaces is not None else None
        self._cache: TLRUCache[tuple[str, bytes], _Entry] = TLRUCache(
            maxsize=max_size, ttu=_entry_expiry, timer=timer
        )
        self._closed = False
        logger.info(
            "memory_cache_backend_initialized",
            max_size=max_size,
            default_ttl=default_ttl,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_usable(self, namespace: str) -> None:
        if self._closed:
            raise ProviderUnavailableError(
                message="Backend has been closed", provider_name=_PROVIDER_NAME
            )
        if self._namespaces is not None and namespace not in self._namespaces:
            raise CacheNotFoundError(
                message=f"Cache '{namespace}' does not exist", provider_name=_PROVIDER_NAME
            )

    def _read_list(self, namespace: str, key: bytes) -> tuple[bytes, ...] | None:
        self._ensure_usable(namespace)
        entry = self._cache.get((namespace, key))
        if entry is None:
            return None
        if not isinstance(entry.value, tuple):
            raise FailedPreconditionError(
                message=f"Key {key!r} holds a scalar, not a list",
                provider_name=_PROVIDER_NAME,
            )
        return entry.value

    def _write_list(self, namespace: str, key: bytes, values: tuple[bytes, ...]) -> int:
        # An emptied list is deleted, so later reads miss.
        if values:
            self._cache[(namespace, key)] = _Entry(values, self._default_ttl)
        else:
            self._cache.pop((namespace, key), None)
        return len(values)

    # ------------------------------------------------------------------
    # ICacheBackend implementation
    # ------------------------------------------------------------------

    async def get(self, namespace: str, key: bytes) -> bytes | None:
        self._ensure_usable(namespace)
        entry = self._cache.get((namespace, key))
        if entry is None:
            return None
        if isinstance(entry.value, tuple):
            raise FailedPreconditionError(
                message=f"Key {key!r} holds a list, not a scalar",
                provider_name=_PROVIDER_NAME,
            )
        return entry.value

    async def set(self, namespace: str, key: bytes, value: bytes, ttl_seconds: int) -> None:
        self._ensure_usable(namespace)
        self._cache[(namespace, key)] = _Entry(value, ttl_seconds)

    async def delete(self, namespace: str, key: bytes) -> None:
        self._ensure_usable(namespace)
        self._cache.pop((namespace, key), None)

    async def list_fetch(self, namespace: str, key: bytes) -> list[bytes] | None:
        values = self._read_list(namespace, key)
        return list(values) if values is not None else None

    async def list_push_front(self, namespace: str, key: bytes, value: bytes) -> int:
        values = self._read_list(namespace, key) or ()
        return self._write_list(namespace, key, (value, *values))

    async def list_push_back(self, namespace: str, key: bytes, value: bytes) -> int:
        values = self._read_list(namespace, key) or ()
        return self._write_list(namespace, key, (*values, value))

    async def list_pop_front(self, namespace: str, key: bytes) -> bytes | None:
        values = self._read_list(namespace, key)
        if not values:
            return None
        self._write_list(namespace, key, values[1:])
        return values[0]

    async def list_pop_back(self, namespace: str, key: bytes) -> bytes | None:
        values = self._read_list(namespace, key)
        if not values:
            return None
        self._write_list(namespace, key, values[:-1])
        return values[-1]

    async def list_concatenate_front(
        self, namespace: str, key: bytes, values: Sequence[bytes]
    ) -> int:
        existing = self._read_list(namespace, key) or ()
        return self._write_list(namespace, key, (*values, *existing))

    async def list_concatenate_back(
        self, namespace: str, key: bytes, values: Sequence[bytes]
    ) -> int:
        existing = self._read_list(namespace, key) or ()
        return self._write_list(namespace, key, (*existing, *values))

    async def list_remove_value(self, namespace: str, key: bytes, value: bytes) -> None:
        values = self._read_list(namespace, key)
        if values is None:
            return
        remaining = tuple(v for v in values if v != value)
        if len(remaining) != len(values):
            self._write_list(namespace, key, remaining)

    async def close(self) -> None:
        self._closed = True
        self._cache.clear()

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        return not self._closed
