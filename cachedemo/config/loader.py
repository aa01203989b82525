"""YAML configuration loader with environment variable overrides.

Configuration is resolved in layers (later layers win):

  1. Settings defaults     — the field defaults in ``Settings``
  2. config/config.yaml    — static defaults checked into the repo
  3. .env / environment    — only variables that are actually set

``load_config`` returns the merged dict; ``build_cache_config`` turns its
``cache`` section into the ``CacheConfig`` the client is constructed with
and is where a missing credential becomes a fatal ``ConfigurationError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from cachedemo.config.settings import Settings
from cachedemo.models.config import CacheConfig
from cachedemo.utils.errors import ConfigurationError

BACKENDS = ("momento", "memory")

# Settings field -> (section, key) in the resolved config dict.
_FIELD_PATHS: dict[str, tuple[str, str]] = {
    "momento_api_key": ("cache", "credential"),
    "cache_name": ("cache", "namespace"),
    "default_ttl_seconds": ("cache", "default_ttl_seconds"),
    "cache_backend": ("cache", "backend"),
    "memory_cache_max_entries": ("cache", "memory_max_entries"),
    "app_env": ("app", "env"),
    "log_level": ("logging", "level"),
}


def load_config(
    path: str | Path = "config/config.yaml",
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Load YAML config and merge it between Settings defaults and explicit env values.

    Args:
        path: Path to the YAML configuration file.  A missing file is fine.
        settings: Pre-built Settings; a fresh one is read from the environment
                  when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: If the YAML cannot be parsed or an environment
            value fails validation.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                yaml_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    message=f"Could not parse {config_path}: {exc}"
                ) from exc
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(message=f"{config_path} must contain a mapping")
    else:
        yaml_config = {}

    if settings is None:
        try:
            settings = Settings()
        except ValidationError as exc:
            raise ConfigurationError(message=f"Invalid environment settings: {exc}") from exc

    resolved = _settings_to_dict(settings, type(settings).model_fields)
    _deep_merge(resolved, yaml_config)
    _deep_merge(resolved, _settings_to_dict(settings, settings.model_fields_set))
    return resolved


def build_cache_config(config: dict[str, Any]) -> CacheConfig:
    """Build the client configuration from the ``cache`` section.

    Raises:
        ConfigurationError: If the backend is unknown, a value is invalid, or
            the Momento backend is selected without an API key.
    """
    cache_section = config.get("cache", {})
    backend = cache_section.get("backend", "momento")
    if backend not in BACKENDS:
        raise ConfigurationError(
            message=f"Unknown cache backend '{backend}'. Expected one of: {', '.join(BACKENDS)}"
        )

    try:
        cache_config = CacheConfig(
            credential=cache_section.get("credential") or "",
            namespace=cache_section.get("namespace", "momento-sandbox"),
            default_ttl_seconds=cache_section.get("default_ttl_seconds", 300),
        )
    except ValidationError as exc:
        raise ConfigurationError(message=f"Invalid cache configuration: {exc}") from exc

    if backend == "momento" and not cache_config.has_credential():
        raise ConfigurationError(
            message="MOMENTO_API_KEY is not set; export it or use the memory backend",
            provider_name="momento",
        )
    return cache_config


def _settings_to_dict(settings: Settings, fields: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for field in fields:
        if field not in _FIELD_PATHS:
            continue
        section, key = _FIELD_PATHS[field]
        result.setdefault(section, {})[key] = getattr(settings, field)
    return result


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
