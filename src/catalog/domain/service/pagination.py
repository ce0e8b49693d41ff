"""Cursor pagination shared by every repository backend.

Two cursor flavours exist. Id cursors name the last product of the
previous page and are resolved by scanning the ordered products. Offset
cursors are the number of products already handed out. Either way a
cursor that resolves to nothing yields an empty page and comes back
unchanged, while a cursor that cannot be parsed is rejected.
"""

from __future__ import annotations

from typing import Iterable

from catalog.domain.exceptions import InvalidCursorError, InvalidPageSizeError
from catalog.domain.model.product import Product, ProductList


def validate_page_size(first: int) -> None:
    if first < 0:
        raise InvalidPageSizeError(f"Page size cannot be negative, got {first}")


def page_after(products: Iterable[Product], first: int, cursor: str) -> ProductList:
    """Collect up to ``first`` products strictly after the one with id ``cursor``.

    An empty cursor starts at the beginning. The returned cursor is the
    id of the last collected product, or the input cursor if nothing
    was collected.
    """
    validate_page_size(first)

    items: list[Product] = []
    if first == 0:
        return ProductList(items, cursor)

    reached = cursor == ""
    for product in products:
        if not reached:
            reached = product.id == cursor
            continue
        items.append(product.copy())
        if len(items) == first:
            break

    new_cursor = items[-1].id if items else cursor
    return ProductList(items, new_cursor)


def parse_offset_cursor(cursor: str) -> int:
    """Turn an offset cursor into an int; blank means zero."""
    stripped = cursor.strip()
    if not stripped:
        return 0
    if not stripped.isdecimal():
        raise InvalidCursorError(f"Invalid cursor {cursor!r}")
    return int(stripped)


def next_offset_cursor(offset: int, returned: int) -> str:
    return str(offset + returned)
