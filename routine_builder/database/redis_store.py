"""
Real Redis-backed key-value store for production when REDIS_URL is set.
Implements the same interface as routine_builder.database.kv_store.
"""

from __future__ import annotations

from typing import Optional

import redis


class RedisKeyValueStore:
    """
    Redis-backed durable store. Keys never expire.
    """

    def __init__(self, url: Optional[str] = None, key_prefix: str = "routine_builder:", client=None) -> None:
        if client is None:
            if not url:
                raise ValueError("REDIS_URL is required for RedisKeyValueStore")
            client = redis.from_url(url, decode_responses=True)
        self._client = client
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        return self._client.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Values must be strings, got {type(value).__name__}")
        self._client.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self._client.delete(self._key(key))

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
