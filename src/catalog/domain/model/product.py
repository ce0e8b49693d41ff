"""Product record and the paginated list envelope.

Products are read-only for the catalog service. The repository owns the
canonical copy of every product and hands callers copies, so a caller
mutating a returned Product never changes what the next caller sees.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal


@dataclass
class Product:
    """An item in the catalog.

    A missing price means the product is not for sale (or free).
    Timestamps are present only when the backend tracks them.
    """

    id: str
    name: str
    display_image: str | None = None
    thumbnail: str | None = None
    price: Decimal | None = None
    description: str | None = None
    short_description: str | None = None
    quantity_in_stock: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def copy(self) -> Product:
        return replace(self)


@dataclass(frozen=True)
class ProductList:
    """One page of products plus the cursor for the page after it."""

    items: list[Product] = field(default_factory=list)
    cursor: str = ""
