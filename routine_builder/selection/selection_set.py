"""
Selection set - the user's ordered working set of products.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from pydantic import ValidationError

from routine_builder.catalog.models import Product, ProductId, product_from_record, unique_by_id
from routine_builder.errors import SelectionDeserializationError

logger = logging.getLogger(__name__)

SelectionListener = Callable[["SelectionSet"], None]


def parse_selection(serialized: str) -> List[Product]:
    """Parse the output of SelectionSet.serialize.

    Raises:
        SelectionDeserializationError: input is not a JSON array of product records
    """
    try:
        data = json.loads(serialized)
    except (TypeError, ValueError) as exc:
        raise SelectionDeserializationError(f"Saved selection is not valid JSON: {exc}", payload=serialized) from exc

    if not isinstance(data, list):
        raise SelectionDeserializationError("Saved selection must be a JSON array", payload=data)

    products: List[Product] = []
    for idx, record in enumerate(data):
        try:
            products.append(product_from_record(record))
        except (ValidationError, ValueError) as exc:
            raise SelectionDeserializationError(f"Invalid saved product at index {idx}: {exc}", payload=record) from exc

    return unique_by_id(products, source="saved selection")


class SelectionSet:
    """Order-preserving set of Product copies, unique by id.

    Entries are snapshots taken when the product was selected; reloading the
    catalog never touches them.

    ``toggle`` and ``clear`` notify every subscribed listener exactly once per
    call, synchronously, after the content has changed. ``restore`` replaces
    content silently since it only reproduces state that was already saved.
    """

    def __init__(self, products: Sequence[Product] = ()) -> None:
        self._items: List[Product] = []
        self._by_id: Dict[ProductId, Product] = {}
        self._listeners: List[SelectionListener] = []
        self._replace(unique_by_id(products, source="selection"))

    # --- Queries -------------------------------------------------------------

    @property
    def items(self) -> List[Product]:
        return list(self._items)

    @property
    def ids(self) -> List[ProductId]:
        return [p.id for p in self._items]

    def contains(self, product_id: ProductId) -> bool:
        return product_id in self._by_id

    def get(self, product_id: ProductId) -> Optional[Product]:
        return self._by_id.get(product_id)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Product]:
        return iter(list(self._items))

    def __bool__(self) -> bool:
        return bool(self._items)

    # --- Mutations -----------------------------------------------------------

    def toggle(self, product: Product) -> bool:
        """Add ``product`` if its id is absent, otherwise remove the member with that id.

        Returns True when the product was added.
        """
        if product.id in self._by_id:
            del self._by_id[product.id]
            self._items = [p for p in self._items if p.id != product.id]
            added = False
            logger.debug("Deselected product %r", product.id)
        else:
            self._items.append(product)
            self._by_id[product.id] = product
            added = True
            logger.debug("Selected product %r", product.id)
        self._notify()
        return added

    def clear(self) -> None:
        self._replace([])
        logger.debug("Cleared selection")
        self._notify()

    def restore(self, serialized: str) -> bool:
        """Replace content with a previously serialized state.

        On failure the set is left empty, the error is logged and False is
        returned.
        """
        try:
            products = parse_selection(serialized)
        except SelectionDeserializationError as e:
            logger.error("Error loading saved products: %s", e)
            self._replace([])
            return False
        self._replace(products)
        logger.info("Restored %d selected products", len(products))
        return True

    def serialize(self) -> str:
        return json.dumps([p.to_dict() for p in self._items], ensure_ascii=False)

    # --- Change notification -------------------------------------------------

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.error("Selection listener %r failed", listener, exc_info=True)

    def _replace(self, products: Sequence[Product]) -> None:
        self._items = list(products)
        self._by_id = {p.id: p for p in self._items}
