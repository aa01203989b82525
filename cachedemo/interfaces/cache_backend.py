"""Abstract base class for cache service backends.

Defines the contract for the remote cache service the demo talks to.
Implementations may wrap a hosted service SDK (Momento) or an in-process
store; the client (``cachedemo.services.cache_client``) depends only on
this interface, so the backend can be swapped without touching callers.

Backends speak in plain values: reads return ``None`` for absence and
failures are raised as :class:`~cachedemo.utils.errors.CacheServiceError`.
Turning those into outcome variants is the client's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence


class ICacheBackend(ABC):
    """Contract for a namespaced key-value and list cache.

    All operations are async so network-backed services do not block the
    event loop.  Keys and values arrive already encoded as ``bytes``.
    """

    # ------------------------------------------------------------------
    # Scalar operations
    # ------------------------------------------------------------------

    @abstractmethod
    async def get(self, namespace: str, key: bytes) -> bytes | None:
        """Return the scalar stored under *key*, or ``None`` if absent or expired.

        Raises
        ------
        cachedemo.utils.errors.CacheServiceError
            If the lookup fails or *key* holds a list.
        """

    @abstractmethod
    async def set(self, namespace: str, key: bytes, value: bytes, ttl_seconds: int) -> None:
        """Store *value* under *key*, replacing whatever was there.

        Parameters
        ----------
        namespace:
            The cache to write into.
        key:
            The cache key.
        value:
            Encoded value.
        ttl_seconds:
            Seconds until the entry expires.  Always positive.
        """

    @abstractmethod
    async def delete(self, namespace: str, key: bytes) -> None:
        """Remove *key* whether it holds a scalar or a list.

        This is a no-op if the key does not exist.
        """

    # ------------------------------------------------------------------
    # List operations
    # ------------------------------------------------------------------

    @abstractmethod
    async def list_fetch(self, namespace: str, key: bytes) -> list[bytes] | None:
        """Return every element of the list in order, or ``None`` if absent."""

    @abstractmethod
    async def list_push_front(self, namespace: str, key: bytes, value: bytes) -> int:
        """Prepend *value*, creating the list if needed; return the new length."""

    @abstractmethod
    async def list_push_back(self, namespace: str, key: bytes, value: bytes) -> int:
        """Append *value*, creating the list if needed; return the new length."""

    @abstractmethod
    async def list_pop_front(self, namespace: str, key: bytes) -> bytes | None:
        """Remove and return the first element, or ``None`` if the list is absent or empty."""

    @abstractmethod
    async def list_pop_back(self, namespace: str, key: bytes) -> bytes | None:
        """Remove and return the last element, or ``None`` if the list is absent or empty."""

    @abstractmethod
    async def list_concatenate_front(
        self, namespace: str, key: bytes, values: Sequence[bytes]
    ) -> int:
        """Prepend *values* keeping their order; return the new length.

        An empty *values* is passed to the service unchanged.
        """

    @abstractmethod
    async def list_concatenate_back(
        self, namespace: str, key: bytes, values: Sequence[bytes]
    ) -> int:
        """Append *values* keeping their order; return the new length."""

    @abstractmethod
    async def list_remove_value(self, namespace: str, key: bytes, value: bytes) -> None:
        """Remove every element equal to *value*.

        Removing a value that is not in the list, or from a list that does
        not exist, is not an error.
        """

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the backend.  Safe to call twice."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this backend, e.g. ``"momento"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the backend is configured well enough to be used."""
