"""
Catalog: product models, the per-session catalog store and the filter engine.
"""

from .filters import FilterCriteria, filter_products, list_categories
from .models import Catalog, Product, ProductRecordModel, parse_catalog_payload
from .store import CatalogStore

__all__ = [
    "Catalog",
    "CatalogStore",
    "FilterCriteria",
    "Product",
    "ProductRecordModel",
    "filter_products",
    "list_categories",
    "parse_catalog_payload",
]
