"""
Local Catalog Client.

Purpose:
- Development-time catalog source that reads products from a JSON file
  (data/products.json by default).

Swap:
Use clients/real_http/http_catalog.py when the catalog is served from a URL.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from routine_builder.integrations.contracts.catalog import CatalogSource

logger = logging.getLogger(__name__)


class LocalCatalogClient(CatalogSource):
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    async def fetch_catalog(self) -> Dict[str, Any]:
        logger.debug("Reading catalog from %s", self.path)
        return await asyncio.to_thread(self._read)
