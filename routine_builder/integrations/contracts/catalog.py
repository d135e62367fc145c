from abc import ABC, abstractmethod
from typing import Any, Dict


class CatalogSource(ABC):
    """Every catalog source client must implement this interface."""

    @abstractmethod
    async def fetch_catalog(self) -> Dict[str, Any]:
        """Return the raw catalog payload: an object with a ``products`` array."""
