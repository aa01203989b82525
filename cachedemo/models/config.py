"""Explicit configuration handed to the cache client and its backend.

``CacheConfig`` replaces reading the credential and namespace from globals:
it is built once at startup (see ``cachedemo.config.loader``) and passed
into ``CacheClient`` and the backend factory.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class CacheConfig(BaseModel):
    """Options recognized by the cache client.

    Attributes
    ----------
    credential:
        Authentication secret for the hosted service.  Empty is allowed
        only for the in-process backend.
    namespace:
        Logical cache identifier ("cache name") used when an operation
        does not name one.
    default_ttl_seconds:
        Time-to-live applied to writes that do not pass their own TTL.
    """

    model_config = ConfigDict(frozen=True)

    credential: SecretStr = SecretStr("")
    namespace: str = Field(default="momento-sandbox", min_length=1)
    default_ttl_seconds: int = Field(default=300, gt=0)

    def has_credential(self) -> bool:
        return bool(self.credential.get_secret_value())
