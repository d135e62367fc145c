"""
HTTP Catalog Client.

Fetches the catalog (a static JSON resource) with a single GET. No retry,
no caching beyond what the caller keeps in memory.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import httpx

from routine_builder.integrations.contracts.catalog import CatalogSource

logger = logging.getLogger(__name__)


class HttpCatalogClient(CatalogSource):
    def __init__(
        self,
        url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url or os.getenv("CATALOG_URL", "")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def fetch_catalog(self) -> Dict[str, Any]:
        if not self.url:
            raise ValueError("CATALOG_URL is not configured.")

        async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            data = response.json()

        logger.debug("Fetched catalog from %s", self.url)
        return data
