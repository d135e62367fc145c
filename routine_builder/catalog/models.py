"""
Catalog data models.

Defines the product record used everywhere in the routine builder:
- the catalog loaded from a catalog source
- selection set entries (value copies of catalog products)
- the JSON records persisted to storage and sent to the relay

Both catalog parsing and selection restore go through ProductRecordModel so
that the two paths agree on what a usable product record is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, ValidationError

from routine_builder.errors import CatalogPayloadError

logger = logging.getLogger(__name__)

ProductId = Union[int, str]


@dataclass(frozen=True)
class Product:
    id: ProductId
    name: str
    brand: str
    category: str
    image: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "category": self.category,
            "image": self.image,
        }
        if self.description is not None:
            data["description"] = self.description
        return data


Catalog = Tuple[Product, ...]


class ProductRecordModel(BaseModel):
    """Shape of a product record as it arrives from JSON.

    Only the fields needed for display and filtering are required.
    """

    id: Union[int, str]
    name: str
    brand: str
    category: str
    image: str
    description: Optional[str] = None

    def to_product(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            brand=self.brand,
            category=self.category,
            image=self.image,
            description=self.description,
        )


def product_from_record(record: Any) -> Product:
    """Validate one JSON record and turn it into a Product.

    Raises:
        ValueError: record is not an object or misses a display field
    """
    if not isinstance(record, dict):
        raise ValueError(f"Product record must be an object, got {type(record).__name__}")
    return ProductRecordModel(**record).to_product()


def unique_by_id(products: Iterable[Product], source: str = "catalog") -> List[Product]:
    """Drop repeated ids, keeping the first occurrence."""
    seen = set()
    out: List[Product] = []
    for product in products:
        if product.id in seen:
            logger.warning("Duplicate product id %r in %s; keeping first occurrence", product.id, source)
            continue
        seen.add(product.id)
        out.append(product)
    return out


def parse_catalog_payload(raw: Any) -> Catalog:
    """Parse a catalog source response into a Catalog.

    Expects an object with a ``products`` array of product records.

    Raises:
        CatalogPayloadError: payload shape is not usable
    """
    if not isinstance(raw, dict):
        raise CatalogPayloadError("Catalog payload must be a JSON object", payload=raw)

    records = raw.get("products")
    if not isinstance(records, list):
        raise CatalogPayloadError("Catalog payload has no 'products' array", payload=raw)

    products: List[Product] = []
    for idx, record in enumerate(records):
        try:
            products.append(product_from_record(record))
        except (ValidationError, ValueError) as exc:
            raise CatalogPayloadError(f"Invalid product record at index {idx}: {exc}", payload=record) from exc

    return tuple(unique_by_id(products))
