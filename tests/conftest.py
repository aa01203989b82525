"""Shared pytest fixtures for the cachedemo test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from cachedemo.interfaces.cache_backend import ICacheBackend
from cachedemo.models.config import CacheConfig
from cachedemo.providers.cache.memory_cache import MemoryCacheBackend
from cachedemo.services.cache_client import CacheClient

TEST_NAMESPACE = "test-cache"


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def cache_config() -> CacheConfig:
    return CacheConfig(credential="test-key", namespace=TEST_NAMESPACE, default_ttl_seconds=60)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_backend(clock: FakeClock) -> MemoryCacheBackend:
    return MemoryCacheBackend(
        max_size=100, default_ttl=60, namespaces=[TEST_NAMESPACE], timer=clock
    )


@pytest.fixture
def client(memory_backend: MemoryCacheBackend, cache_config: CacheConfig) -> CacheClient:
    """CacheClient wired to an in-process backend."""
    return CacheClient(backend=memory_backend, config=cache_config)


@pytest.fixture
def mock_backend() -> ICacheBackend:
    """Mock ICacheBackend whose reads miss and writes succeed by default.

    Override per test, e.g. ``mock_backend.get.return_value = b"v"`` or
    ``mock_backend.get.side_effect = TimeoutError()``.
    """
    mock = MagicMock(spec=ICacheBackend)
    mock.get_provider_name.return_value = "mock"
    mock.is_available.return_value = True
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=None)
    mock.delete = AsyncMock(return_value=None)
    mock.list_fetch = AsyncMock(return_value=None)
    mock.list_push_front = AsyncMock(return_value=1)
    mock.list_push_back = AsyncMock(return_value=1)
    mock.list_pop_front = AsyncMock(return_value=None)
    mock.list_pop_back = AsyncMock(return_value=None)
    mock.list_concatenate_front = AsyncMock(return_value=0)
    mock.list_concatenate_back = AsyncMock(return_value=0)
    mock.list_remove_value = AsyncMock(return_value=None)
    mock.close = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_client(mock_backend: ICacheBackend, cache_config: CacheConfig) -> CacheClient:
    return CacheClient(backend=mock_backend, config=cache_config)
