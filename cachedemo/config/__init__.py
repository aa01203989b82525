"""Configuration module — exports Settings and the config loaders."""

from cachedemo.config.loader import build_cache_config, load_config
from cachedemo.config.settings import Settings

__all__ = ["Settings", "build_cache_config", "load_config"]
