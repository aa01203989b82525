"""Application assembly for cachedemo.

Builds the backend selected by configuration and wraps it in a
``CacheClient``.  The CLI calls :func:`build_cache_client`; tests can call
:func:`build_cache_backend` directly with a hand-made config dict.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import PositiveInt, TypeAdapter, ValidationError

from cachedemo.config.loader import build_cache_config, load_config
from cachedemo.interfaces.cache_backend import ICacheBackend
from cachedemo.models.config import CacheConfig
from cachedemo.providers.cache.memory_cache import MemoryCacheBackend
from cachedemo.services.cache_client import CacheClient
from cachedemo.utils.errors import ConfigurationError

logger = structlog.get_logger(logger_name=__name__)

_POSITIVE_INT = TypeAdapter(PositiveInt)


def _max_entries(raw: Any) -> int:
    """Validate ``memory_max_entries``, which YAML may hand over as any type."""
    try:
        return _POSITIVE_INT.validate_python(raw)
    except ValidationError as exc:
        raise ConfigurationError(
            message=f"memory_max_entries must be a positive integer, got {raw!r}"
        ) from exc


def build_cache_backend(config: dict[str, Any], cache_config: CacheConfig) -> ICacheBackend:
    """Construct the backend named by ``config["cache"]["backend"]``.

    Raises:
        ConfigurationError: If ``memory_max_entries`` is not a positive integer.
    """
    cache_section = config.get("cache", {})
    backend_name = cache_section.get("backend", "momento")

    if backend_name == "memory":
        return MemoryCacheBackend(
            max_size=_max_entries(cache_section.get("memory_max_entries", 10_000)),
            default_ttl=cache_config.default_ttl_seconds,
            namespaces=[cache_config.namespace],
        )

    # Deferred so the memory backend works without the SDK's gRPC stack loaded.
    from cachedemo.providers.cache.momento_cache import MomentoCacheBackend

    return MomentoCacheBackend(config=cache_config)


def build_cache_client(
    config: dict[str, Any] | None = None,
    config_path: str = "config/config.yaml",
) -> CacheClient:
    """Resolve configuration and return a ready-to-use client.

    Raises:
        cachedemo.utils.errors.ConfigurationError: On missing credential or
            invalid settings.
    """
    resolved = config if config is not None else load_config(config_path)
    cache_config = build_cache_config(resolved)
    backend = build_cache_backend(resolved, cache_config)
    logger.info(
        "cache_client_built",
        backend=backend.get_provider_name(),
        namespace=cache_config.namespace,
        default_ttl=cache_config.default_ttl_seconds,
    )
    return CacheClient(backend=backend, config=cache_config)
