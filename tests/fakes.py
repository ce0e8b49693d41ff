"""Test doubles and builders.

FakeProductRepository implements the same abstract interface as the
real engines but just records its calls and replays canned results.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from catalog.domain.model.ordering import OrderBy
from catalog.domain.model.product import Product, ProductList
from catalog.domain.repository.product_repository import ProductRepository

_EPOCH = datetime(2017, 1, 1, tzinfo=timezone.utc)


def make_product(
    product_id: str,
    name: str | None = None,
    price: str | None = "10.00",
    created: int | None = None,
    updated: int | None = None,
    **kwargs,
) -> Product:
    """Build a Product; ``created``/``updated`` are seconds after a fixed epoch."""
    return Product(
        id=product_id,
        name=name if name is not None else f"Product {product_id}",
        price=Decimal(price) if price is not None else None,
        created_at=_EPOCH + timedelta(seconds=created) if created is not None else None,
        updated_at=_EPOCH + timedelta(seconds=updated) if updated is not None else None,
        **kwargs,
    )


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {p.id: p for p in products or []}
        self.calls: list[tuple] = []

    def get_products(self, first: int, cursor: str, order_by: OrderBy) -> ProductList:
        self.calls.append(("get_products", first, cursor, order_by))
        return ProductList(list(self._store.values())[:first], "fake-cursor")

    def get_product(self, product_id: str) -> Product | None:
        self.calls.append(("get_product", product_id))
        return self._store.get(product_id)

    def search_products(self, search_text: str, first: int, cursor: str) -> ProductList:
        self.calls.append(("search_products", search_text, first, cursor))
        matches = [p for p in self._store.values() if search_text.lower() in p.name.lower()]
        return ProductList(matches[:first], matches[-1].id if matches else cursor)
