"""Application service: Search Products use case (query)."""

from __future__ import annotations

from catalog.application.dto import ProductPageDTO
from catalog.application.list_products import DEFAULT_PAGE_SIZE
from catalog.domain.exceptions import ValidationError
from catalog.domain.repository.product_repository import ProductRepository


class SearchProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self, search_text: str, first: int = DEFAULT_PAGE_SIZE, cursor: str = ""
    ) -> ProductPageDTO:
        if not search_text or not search_text.strip():
            raise ValidationError("Search text is required")
        products = self._product_repo.search_products(search_text, first, cursor)
        return ProductPageDTO.from_list(products)
