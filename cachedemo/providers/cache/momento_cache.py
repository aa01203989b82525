"""Momento hosted-cache backend implementing ICacheBackend.

Wraps ``momento.CacheClientAsync``.  The SDK already answers every call
with a Hit/Miss/Success/Error response object; this adapter flattens those
into the plain values the ICacheBackend contract speaks and raises
:class:`CacheServiceError` for SDK Error responses so the cache client has
a single place where outcomes are built.

The SDK client is created lazily on the first call, using the Laptop
configuration profile and the credential from :class:`CacheConfig`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from datetime import timedelta
from typing import Any, NoReturn

import structlog
from momento import CacheClientAsync, Configurations, CredentialProvider
from momento import responses as momento_responses

from cachedemo.interfaces.cache_backend import ICacheBackend
from cachedemo.models.config import CacheConfig
from cachedemo.utils.errors import (
    CacheServiceError,
    ConfigurationError,
    ErrorCode,
    ProviderUnavailableError,
)

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "momento"


class MomentoCacheBackend(ICacheBackend):
    """Backend that forwards every call to the Momento service.

    Parameters
    ----------
    config:
        Credential and default TTL for the SDK client.
    client:
        An already-created ``CacheClientAsync``.  When omitted, one is
        created from *config* on first use.
    """

    def __init__(self, config: CacheConfig, client: CacheClientAsync | None = None) -> None:
        self._config = config
        self._client = client
        self._client_lock = asyncio.Lock()
        logger.info(
            "momento_backend_initialized",
            namespace=config.namespace,
            default_ttl=config.default_ttl_seconds,
        )

    # ------------------------------------------------------------------
    # SDK client management
    # ------------------------------------------------------------------

    async def _get_client(self) -> CacheClientAsync:
        if self._client is not None:
            return self._client

        async with self._client_lock:
            if self._client is None:
                if not self._config.has_credential():
                    raise ConfigurationError(
                        message="Momento API key is not configured",
                        provider_name=_PROVIDER_NAME,
                    )
                try:
                    self._client = await CacheClientAsync.create(
                        Configurations.Laptop.v1(),
                        CredentialProvider.from_string(
                            self._config.credential.get_secret_value()
                        ),
                        timedelta(seconds=self._config.default_ttl_seconds),
                    )
                except Exception as exc:
                    raise ProviderUnavailableError(
                        message=f"Could not create Momento client: {exc}",
                        provider_name=_PROVIDER_NAME,
                    ) from exc
                logger.debug("momento_client_created")
        return self._client

    def _raise_sdk_error(self, operation: str, response: Any) -> NoReturn:
        """Translate an SDK Error response into a CacheServiceError."""
        code_name = getattr(response.error_code, "name", "")
        error_code = ErrorCode.__members__.get(code_name, ErrorCode.UNKNOWN_ERROR)
        message = str(response.message or f"Momento {operation} failed")
        inner = response.inner_exception
        cause = inner if isinstance(inner, BaseException) else None
        raise CacheServiceError(
            message=message, provider_name=_PROVIDER_NAME, error_code=error_code
        ) from cause

    def _raise_unexpected(self, operation: str, response: Any) -> NoReturn:
        raise CacheServiceError(
            message=f"Unexpected Momento {operation} response: {type(response).__name__}",
            provider_name=_PROVIDER_NAME,
            error_code=ErrorCode.UNKNOWN_ERROR,
        )

    # ------------------------------------------------------------------
    # ICacheBackend implementation
    # ------------------------------------------------------------------

    async def get(self, namespace: str, key: bytes) -> bytes | None:
        client = await self._get_client()
        response = await client.get(namespace, key)
        match response:
            case momento_responses.CacheGet.Hit():
                return response.value_bytes
            case momento_responses.CacheGet.Miss():
                return None
            case momento_responses.CacheGet.Error():
                self._raise_sdk_error("get", response)
        self._raise_unexpected("get", response)

    async def set(self, namespace: str, key: bytes, value: bytes, ttl_seconds: int) -> None:
        client = await self._get_client()
        response = await client.set(namespace, key, value, ttl=timedelta(seconds=ttl_seconds))
        match response:
            case momento_responses.CacheSet.Success():
                return None
            case momento_responses.CacheSet.Error():
                self._raise_sdk_error("set", response)
        self._raise_unexpected("set", response)

    async def delete(self, namespace: str, key: bytes) -> None:
        client = await self._get_client()
        response = await client.delete(namespace, key)
        match response:
            case momento_responses.CacheDelete.Success():
                return None
            case momento_responses.CacheDelete.Error():
                self._raise_sdk_error("delete", response)
        self._raise_unexpected("delete", response)

    async def list_fetch(self, namespace: str, key: bytes) -> list[bytes] | None:
        client = await self._get_client()
        response = await client.list_fetch(namespace, key)
        match response:
            case momento_responses.CacheListFetch.Hit():
                return list(response.value_list_bytes)
            case momento_responses.CacheListFetch.Miss():
                return None
            case momento_responses.CacheListFetch.Error():
                self._raise_sdk_error("list_fetch", response)
        self._raise_unexpected("list_fetch", response)

    async def list_push_front(self, namespace: str, key: bytes, value: bytes) -> int:
        client = await self._get_client()
        response = await client.list_push_front(namespace, key, value)
        match response:
            case momento_responses.CacheListPushFront.Success():
                return response.list_length
            case momento_responses.CacheListPushFront.Error():
                self._raise_sdk_error("list_push_front", response)
        self._raise_unexpected("list_push_front", response)

    async def list_push_back(self, namespace: str, key: bytes, value: bytes) -> int:
        client = await self._get_client()
        response = await client.list_push_back(namespace, key, value)
        match response:
            case momento_responses.CacheListPushBack.Success():
                return response.list_length
            case momento_responses.CacheListPushBack.Error():
                self._raise_sdk_error("list_push_back", response)
        self._raise_unexpected("list_push_back", response)

    async def list_pop_front(self, namespace: str, key: bytes) -> bytes | None:
        client = await self._get_client()
        response = await client.list_pop_front(namespace, key)
        match response:
            case momento_responses.CacheListPopFront.Hit():
                return response.value_bytes
            case momento_responses.CacheListPopFront.Miss():
                return None
            case momento_responses.CacheListPopFront.Error():
                self._raise_sdk_error("list_pop_front", response)
        self._raise_unexpected("list_pop_front", response)

    async def list_pop_back(self, namespace: str, key: bytes) -> bytes | None:
        client = await self._get_client()
        response = await client.list_pop_back(namespace, key)
        match response:
            case momento_responses.CacheListPopBack.Hit():
                return response.value_bytes
            case momento_responses.CacheListPopBack.Miss():
                return None
            case momento_responses.CacheListPopBack.Error():
                self._raise_sdk_error("list_pop_back", response)
        self._raise_unexpected("list_pop_back", response)

    async def list_concatenate_front(
        self, namespace: str, key: bytes, values: Sequence[bytes]
    ) -> int:
        client = await self._get_client()
        response = await client.list_concatenate_front(namespace, key, list(values))
        match response:
            case momento_responses.CacheListConcatenateFront.Success():
                return response.list_length
            case momento_responses.CacheListConcatenateFront.Error():
                self._raise_sdk_error("list_concatenate_front", response)
        self._raise_unexpected("list_concatenate_front", response)

    async def list_concatenate_back(
        self, namespace: str, key: bytes, values: Sequence[bytes]
    ) -> int:
        client = await self._get_client()
        response = await client.list_concatenate_back(namespace, key, list(values))
        match response:
            case momento_responses.CacheListConcatenateBack.Success():
                return response.list_length
            case momento_responses.CacheListConcatenateBack.Error():
                self._raise_sdk_error("list_concatenate_back", response)
        self._raise_unexpected("list_concatenate_back", response)

    async def list_remove_value(self, namespace: str, key: bytes, value: bytes) -> None:
        client = await self._get_client()
        response = await client.list_remove_value(namespace, key, value)
        match response:
            case momento_responses.CacheListRemoveValue.Success():
                return None
            case momento_responses.CacheListRemoveValue.Error():
                self._raise_sdk_error("list_remove_value", response)
        self._raise_unexpected("list_remove_value", response)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
            logger.debug("momento_client_closed")

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        """Available when a credential is configured."""
        return self._config.has_credential()
