"""
Catalog store - holds the product catalog for one session once loaded.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from routine_builder.catalog.filters import list_categories
from routine_builder.catalog.models import Catalog, Product, parse_catalog_payload
from routine_builder.integrations.contracts.catalog import CatalogSource

logger = logging.getLogger(__name__)


class CatalogStore:
    """In-memory catalog backed by a CatalogSource.

    ``load`` never raises: on failure the content is an empty catalog and the
    error is logged. A failed load leaves ``loaded`` False so the next caller
    that needs the catalog triggers a fresh fetch.
    """

    def __init__(self, source: CatalogSource) -> None:
        self._source = source
        self._products: Catalog = ()
        self._loaded = False
        self.last_error: Optional[str] = None

    @property
    def products(self) -> Catalog:
        return self._products

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> Catalog:
        try:
            raw = await self._source.fetch_catalog()
            products = parse_catalog_payload(raw)
        except Exception as e:
            logger.error("Error loading products: %s", e, exc_info=True)
            self._products = ()
            self._loaded = False
            self.last_error = str(e)
            return self._products

        self._products = products
        self._loaded = True
        self.last_error = None
        logger.info("Loaded catalog with %d products", len(products))
        return self._products

    def get(self, product_id: Union[int, str]) -> Optional[Product]:
        """Look up a product by id; ``1`` and ``"1"`` address the same product."""
        wanted = str(product_id)
        return next((p for p in self._products if str(p.id) == wanted), None)

    def categories(self) -> List[str]:
        return list_categories(self._products)

    def __len__(self) -> int:
        return len(self._products)
