"""In-process implementation of ProductRepository.

Holds a snapshot of every product plus a text index built from the same
snapshot. Neither changes after construction, so reads need no locking.
"""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Any, Iterable

from catalog.domain.exceptions import UnsupportedOrderKeyError
from catalog.domain.model.ordering import OrderBy, OrderByKey
from catalog.domain.model.product import Product, ProductList
from catalog.domain.repository.product_repository import ProductRepository
from catalog.domain.service.pagination import page_after, validate_page_size
from catalog.infrastructure.persistence.search_text import document_text
from catalog.infrastructure.persistence.text_index import TextIndex

logger = logging.getLogger(__name__)


class InMemoryProductRepository(ProductRepository):

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: tuple[Product, ...] = tuple(p.copy() for p in products)
        self._by_id: dict[str, Product] = {p.id: p for p in self._products}
        self._index = TextIndex()
        for product in self._products:
            self._index.add(product.id, document_text(product))

        logger.info("In-memory repository ready with %d products", len(self._products))

    # --- ProductRepository interface ------------------------------------------

    def get_products(self, first: int, cursor: str, order_by: OrderBy) -> ProductList:
        validate_page_size(first)
        keys = order_by.materialize()
        ordered = sorted(self._products, key=cmp_to_key(_comparator(keys)))
        logger.debug("Listing %d products after %r ordered by %s", first, cursor, keys)
        return page_after(ordered, first, cursor)

    def get_product(self, product_id: str) -> Product | None:
        product = self._by_id.get(product_id)
        return product.copy() if product is not None else None

    def search_products(self, search_text: str, first: int, cursor: str) -> ProductList:
        validate_page_size(first)
        ranked = [self._by_id[doc_id] for doc_id in self._index.search(search_text)]
        logger.debug("Search %r matched %d products", search_text, len(ranked))
        return page_after(ranked, first, cursor)


# --- Sorting helpers ----------------------------------------------------------

_SORTABLE_FIELDS = {"created_at", "updated_at", "name", "price"}


def _compare_values(left: Any, right: Any, descending: bool) -> int:
    """Compare two field values; None sorts last whatever the direction."""
    if left is None and right is None:
        return 0
    if left is None:
        return 1
    if right is None:
        return -1
    result = (left > right) - (left < right)
    return -result if descending else result


def _comparator(keys: tuple[OrderByKey, ...]):
    for key in keys:
        if key.field not in _SORTABLE_FIELDS:
            raise UnsupportedOrderKeyError(f"Unsupported order by field {key.value}")

    def compare(left: Product, right: Product) -> int:
        for key in keys:
            result = _compare_values(
                getattr(left, key.field), getattr(right, key.field), key.descending
            )
            if result:
                return result
        return 0

    return compare
