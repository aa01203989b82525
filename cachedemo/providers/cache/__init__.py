"""Cache backends.

MomentoCacheBackend forwards every call to the hosted Momento service.
MemoryCacheBackend is a TTL-aware in-process stand-in used for offline
runs and tests; both implement ICacheBackend, so the client does not
know which one it talks to.
"""

from cachedemo.providers.cache.memory_cache import MemoryCacheBackend

__all__ = ["MemoryCacheBackend"]
