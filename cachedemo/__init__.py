"""cachedemo — typed-outcome client demo for a hosted cache service."""

__version__ = "0.1.0"
