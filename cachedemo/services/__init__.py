"""Services: the outcome-returning cache client and the demo scenarios."""

from cachedemo.services.cache_client import CacheClient

__all__ = ["CacheClient"]
