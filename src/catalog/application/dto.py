"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry display-ready product data from the application layer to the
CLI without exposing domain objects.
"""

from __future__ import annotations

from dataclasses import dataclass

from catalog.domain.model.product import Product, ProductList


@dataclass(frozen=True)
class ProductDTO:
    """Output: a single product as displayed to the user."""

    id: str
    name: str
    price: str | None  # two decimals, e.g. "2499.99"; None when not for sale
    quantity: int
    short_description: str | None
    description: str | None
    display_image: str | None
    thumbnail: str | None
    created_at: str | None
    updated_at: str | None

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=f"{product.price:.2f}" if product.price is not None else None,
            quantity=product.quantity_in_stock,
            short_description=product.short_description,
            description=product.description,
            display_image=product.display_image,
            thumbnail=product.thumbnail,
            created_at=product.created_at.isoformat() if product.created_at else None,
            updated_at=product.updated_at.isoformat() if product.updated_at else None,
        )


@dataclass(frozen=True)
class ProductPageDTO:
    """Output: one page of products and the cursor for the next page."""

    products: list[ProductDTO]
    cursor: str

    @staticmethod
    def from_list(product_list: ProductList) -> ProductPageDTO:
        return ProductPageDTO(
            products=[ProductDTO.from_product(p) for p in product_list.items],
            cursor=product_list.cursor,
        )
