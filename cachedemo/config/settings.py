"""Application settings loaded from environment variables via pydantic-settings.

Two sources, in priority order:

  1. Environment variables, e.g. ``MOMENTO_API_KEY=...`` (always win)
  2. A ``.env`` file in the working directory (local development)

Field names map to upper-cased env vars: ``cache_name`` <- ``CACHE_NAME``.
Defaults apply when neither source sets a field.  The ``.env`` file holds
the API key and must never be committed.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """cachedemo settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # === Hosted cache ===
    # Empty string = "not configured"; the Momento backend refuses to start.
    momento_api_key: str = ""
    cache_name: str = "momento-sandbox"
    default_ttl_seconds: int = 300

    # === Backend selection ===
    # "momento" talks to the hosted service; "memory" runs fully offline.
    cache_backend: str = "momento"
    memory_cache_max_entries: int = 10_000

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def has_momento_credential(self) -> bool:
        """Return ``True`` when an API key is configured."""
        return bool(self.momento_api_key)
