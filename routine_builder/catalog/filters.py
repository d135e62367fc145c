"""
Catalog filtering - derive the visible subset of the catalog.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from routine_builder.catalog.models import Product


@dataclass(frozen=True)
class FilterCriteria:
    """Category + search term pair. Empty strings mean "all"."""

    category: str = ""
    search_term: str = ""

    @classmethod
    def from_inputs(cls, category: Optional[str] = None, search: Optional[str] = None) -> "FilterCriteria":
        return cls(category=category or "", search_term=search or "")

    @property
    def is_empty(self) -> bool:
        return not self.category and not self.search_term


def matches_category(product: Product, category: str) -> bool:
    # exact, case-sensitive
    return not category or product.category == category


def matches_search(product: Product, search_term: str) -> bool:
    if not search_term:
        return True
    term = search_term.lower()
    if term in product.name.lower() or term in product.brand.lower():
        return True
    return bool(product.description) and term in product.description.lower()


def filter_products(products: Iterable[Product], criteria: FilterCriteria) -> List[Product]:
    """Apply FilterCriteria to a catalog and return matching products in catalog order."""
    return [
        p
        for p in products
        if matches_category(p, criteria.category) and matches_search(p, criteria.search_term)
    ]


def list_categories(products: Iterable[Product]) -> List[str]:
    """Distinct categories in first-seen catalog order."""
    categories: List[str] = []
    seen = set()
    for p in products:
        if p.category not in seen:
            seen.add(p.category)
            categories.append(p.category)
    return categories
