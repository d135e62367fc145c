"""
Persistence adapters over a durable string-keyed store.

Two independent keys per scope:
- ``selectedProducts``: the serialized selection set
- ``rtlMode``: "true"/"false" display-direction preference

No expiry and no schema versioning. An incompatible stored selection is
rejected by SelectionSet.restore, not here.
"""

from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)

SELECTION_KEY = "selectedProducts"
RTL_KEY = "rtlMode"


def scoped_key(scope: Optional[str], key: str) -> str:
    return f"{scope}:{key}" if scope else key


class SelectionPersistence:
    def __init__(self, store, scope: Optional[str] = None) -> None:
        self.store = store
        self.key = scoped_key(scope, SELECTION_KEY)

    def save(self, selection_serialized: str) -> None:
        self.store.set(self.key, selection_serialized)
        logger.debug("Saved selection under %s", self.key)

    def load(self) -> Optional[str]:
        return self.store.get(self.key)

    def clear(self) -> None:
        self.store.delete(self.key)


class DisplayPreferences:
    def __init__(self, store, scope: Optional[str] = None) -> None:
        self.store = store
        self.key = scoped_key(scope, RTL_KEY)

    def is_rtl(self) -> bool:
        return self.store.get(self.key) == "true"

    def set_rtl(self, enabled: bool) -> None:
        self.store.set(self.key, "true" if enabled else "false")

    def toggle_rtl(self) -> bool:
        enabled = not self.is_rtl()
        self.set_rtl(enabled)
        return enabled
