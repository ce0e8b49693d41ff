"""Application service: List Products use case (query)."""

from __future__ import annotations

from catalog.application.dto import ProductPageDTO
from catalog.domain.model.ordering import OrderBy
from catalog.domain.repository.product_repository import ProductRepository

DEFAULT_PAGE_SIZE = 20


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self, first: int = DEFAULT_PAGE_SIZE, cursor: str = "", order_by: str = ""
    ) -> ProductPageDTO:
        """List a page of products.

        ``order_by`` is a comma-separated list of sort keys such as
        ``"name,priceDesc"``; an empty string means the default order.
        """
        products = self._product_repo.get_products(first, cursor, OrderBy.from_string(order_by))
        return ProductPageDTO.from_list(products)
