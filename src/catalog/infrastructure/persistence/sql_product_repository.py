"""SQL-backed implementation of ProductRepository.

Ordering, pagination and search are pushed down to the database. Cursors
are offsets into the ordered result, encoded as strings.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Sequence

from sqlalchemy import Engine, Numeric, case, cast, func, or_, select
from sqlalchemy.orm import Session

from catalog.domain.exceptions import ProductMappingError, UnsupportedOrderKeyError
from catalog.domain.model.ordering import OrderBy, OrderByKey
from catalog.domain.model.product import Product, ProductList
from catalog.domain.repository.product_repository import ProductRepository
from catalog.domain.service.pagination import (
    next_offset_cursor,
    parse_offset_cursor,
    validate_page_size,
)
from catalog.infrastructure.persistence.search_text import query_terms, search_document
from catalog.infrastructure.persistence.sql_models import Base, ProductRow

logger = logging.getLogger(__name__)

_PRICE = cast(ProductRow.price, Numeric)

_ORDER_COLUMNS = {
    OrderByKey.CREATED: ProductRow.created_at.asc(),
    OrderByKey.CREATED_DESC: ProductRow.created_at.desc(),
    OrderByKey.UPDATED: ProductRow.updated_at.asc(),
    OrderByKey.UPDATED_DESC: ProductRow.updated_at.desc(),
    OrderByKey.NAME: ProductRow.name.asc(),
    OrderByKey.NAME_DESC: ProductRow.name.desc(),
    OrderByKey.PRICE: _PRICE.asc(),
    OrderByKey.PRICE_DESC: _PRICE.desc(),
}


class SqlProductRepository(ProductRepository):

    def __init__(self, engine: Engine, bootstrap: Sequence[Product] = ()) -> None:
        self._engine = engine
        Base.metadata.create_all(engine, checkfirst=True)
        if bootstrap:
            self._bulk_load(bootstrap)

    # --- ProductRepository interface ------------------------------------------

    def get_products(self, first: int, cursor: str, order_by: OrderBy) -> ProductList:
        validate_page_size(first)
        offset = parse_offset_cursor(cursor)
        stmt = (
            select(ProductRow)
            .order_by(*order_clauses(order_by), ProductRow.id)
            .limit(first)
            .offset(offset)
        )
        return self._fetch_page(stmt, offset, cursor)

    def get_product(self, product_id: str) -> Product | None:
        with Session(self._engine) as session:
            row = session.get(ProductRow, product_id)
            return _to_product(row) if row is not None else None

    def search_products(self, search_text: str, first: int, cursor: str) -> ProductList:
        validate_page_size(first)
        offset = parse_offset_cursor(cursor)

        terms = query_terms(search_text)
        if not terms:
            return ProductList([], cursor)

        matches = [
            ProductRow.search_document.contains(f" {term} ", autoescape=True)
            for term in terms
        ]
        rank = case((matches[0], 1), else_=0)
        for match in matches[1:]:
            rank = rank + case((match, 1), else_=0)

        stmt = (
            select(ProductRow)
            .where(or_(*matches))
            .order_by(rank.desc(), ProductRow.id)
            .limit(first)
            .offset(offset)
        )
        return self._fetch_page(stmt, offset, cursor)

    def close(self) -> None:
        self._engine.dispose()

    # --- Helpers --------------------------------------------------------------

    def count(self) -> int:
        with Session(self._engine) as session:
            return session.scalar(select(func.count()).select_from(ProductRow)) or 0

    def _fetch_page(self, stmt, offset: int, cursor: str) -> ProductList:
        logger.debug("Executing %s with offset %d", stmt, offset)
        with Session(self._engine) as session:
            items = [_to_product(row) for row in session.scalars(stmt)]
        if not items:
            return ProductList(items, cursor)
        return ProductList(items, next_offset_cursor(offset, len(items)))

    def _bulk_load(self, products: Sequence[Product]) -> None:
        """Insert every product in one transaction; any failure rolls all back."""
        with Session(self._engine) as session, session.begin():
            session.add_all(_to_row(product) for product in products)
        logger.info("Loaded %d products into the product table", len(products))


def order_clauses(order_by: OrderBy) -> list:
    clauses = []
    for key in order_by.materialize():
        try:
            clauses.append(_ORDER_COLUMNS[key].nulls_last())
        except KeyError as exc:
            raise UnsupportedOrderKeyError(f"Unsupported order by field {key.value}") from exc
    return clauses


# --- Row mapping --------------------------------------------------------------


def _to_row(product: Product) -> ProductRow:
    return ProductRow(
        id=product.id,
        name=product.name,
        description=product.description,
        short_description=product.short_description,
        display_image=product.display_image,
        thumbnail=product.thumbnail,
        price=f"{product.price:.6f}" if product.price is not None else None,
        qty_in_stock=product.quantity_in_stock,
        created_at=_to_utc(product.created_at),
        updated_at=_to_utc(product.updated_at),
        search_document=search_document(product),
    )


def _to_product(row: ProductRow) -> Product:
    price = None
    if row.price:
        try:
            price = Decimal(row.price)
        except InvalidOperation as exc:
            raise ProductMappingError(
                f"Product {row.id} has an unparseable price {row.price!r}"
            ) from exc

    return Product(
        id=row.id,
        name=row.name,
        display_image=row.display_image,
        thumbnail=row.thumbnail,
        price=price,
        description=row.description,
        short_description=row.short_description,
        quantity_in_stock=row.qty_in_stock,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def _to_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc)
    return value


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops the offset on the way in; stored values are UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
