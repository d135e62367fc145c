"""
Lightweight in-memory key-value store for local development and tests.

Mirrors the small interface the persistence adapters need from a durable
string-keyed store (get/set/delete by string key, string-only values) so the
service can run without a real Redis instance.
"""

from __future__ import annotations

from typing import Dict, Optional


class KeyValueStore:
    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Values must be strings, got {type(value).__name__}")
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def ping(self) -> bool:
        """
        Health check calls this; always True for the in-memory store.
        """
        return True
