"""Abstract interfaces for cachedemo's external services.

The cache client depends on :class:`ICacheBackend` rather than on a
concrete SDK, so the hosted backend and the in-process backend are
interchangeable.
"""

from cachedemo.interfaces.cache_backend import ICacheBackend

__all__ = ["ICacheBackend"]
