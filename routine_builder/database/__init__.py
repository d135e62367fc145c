"""
Durable string-keyed storage used by the persistence adapters.
"""

from .kv_store import KeyValueStore

__all__ = ["KeyValueStore"]
