"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete engines (in-memory, SQL) live in the
infrastructure layer and are chosen once, at startup, by the
composition root.

Every method is safe to call concurrently once the repository has been
constructed: the product set is fixed at construction time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.ordering import OrderBy
from catalog.domain.model.product import Product, ProductList


class ProductRepository(ABC):

    @abstractmethod
    def get_products(self, first: int, cursor: str, order_by: OrderBy) -> ProductList:
        """Return up to ``first`` products after ``cursor`` in ``order_by`` order."""

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def search_products(self, search_text: str, first: int, cursor: str) -> ProductList:
        """Return up to ``first`` matches for ``search_text`` after ``cursor``.

        Matches come back in relevance order; OrderBy does not apply.
        """

    def close(self) -> None:
        """Release any resources held by the repository."""
