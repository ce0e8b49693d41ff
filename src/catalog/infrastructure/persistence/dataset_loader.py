"""Bootstrap datasets bundled with the package.

A dataset is a JSON array of product objects using the camelCase field
names of the public API. Optional fields may be null or missing.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from catalog.domain.exceptions import DatasetError, UnsupportedDatasetError
from catalog.domain.model.product import Product
from catalog.infrastructure.config import InitDataset

logger = logging.getLogger(__name__)

_DATASET_DIR = Path(__file__).resolve().parents[1] / "datasets"

_DATASET_FILES = {
    InitDataset.SMALL: "small.json",
}


def load_dataset(dataset: InitDataset | str) -> list[Product]:
    """Return the products of a bundled dataset; NONE yields no products."""
    try:
        dataset = InitDataset(dataset)
    except ValueError as exc:
        raise UnsupportedDatasetError(f"Unsupported dataset {dataset!r}") from exc

    if dataset is InitDataset.NONE:
        return []

    file_name = _DATASET_FILES.get(dataset)
    if file_name is None:
        raise UnsupportedDatasetError(f"Unsupported dataset {dataset.value!r}")

    products = load_dataset_file(_DATASET_DIR / file_name)
    logger.info("Loaded %d products from dataset %s", len(products), dataset.value)
    return products


def load_dataset_file(file_path: Path) -> list[Product]:
    try:
        raw = json.loads(file_path.read_text(encoding="utf-8"), parse_float=Decimal)
    except json.JSONDecodeError as exc:
        raise DatasetError(f"Dataset {file_path.name} is not valid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise DatasetError(f"Dataset {file_path.name} must be a JSON array")
    return [_product_from_json(item) for item in raw]


# --- Parsing helpers ----------------------------------------------------------


def _product_from_json(item: dict[str, Any]) -> Product:
    try:
        product_id = item["id"]
        name = item["name"]
    except (KeyError, TypeError) as exc:
        raise DatasetError(f"Dataset entry is missing a required field: {item!r}") from exc

    return Product(
        id=str(product_id),
        name=name,
        display_image=item.get("displayImage"),
        thumbnail=item.get("thumbnail"),
        price=_parse_price(item.get("price"), product_id),
        description=item.get("description"),
        short_description=item.get("shortDescription"),
        quantity_in_stock=_parse_quantity(item.get("quantityInStock"), product_id),
        created_at=_parse_timestamp(item.get("createdAt"), product_id),
        updated_at=_parse_timestamp(item.get("updatedAt"), product_id),
    )


def _parse_price(value: Any, product_id: str) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation as exc:
        raise DatasetError(f"Product {product_id} has an invalid price {value!r}") from exc
    if not price.is_finite():
        raise DatasetError(f"Product {product_id} has an invalid price {value!r}")
    return price


def _parse_quantity(value: Any, product_id: str) -> int:
    if value is None:
        return 0
    try:
        quantity = int(str(value))
    except (TypeError, ValueError) as exc:
        raise DatasetError(f"Product {product_id} has an invalid quantity {value!r}") from exc
    if quantity < 0:
        raise DatasetError(f"Product {product_id} has a negative quantity {value!r}")
    return quantity


def _parse_timestamp(value: Any, product_id: str) -> datetime | None:
    """Parse an ISO-8601 timestamp; values without an offset are taken as UTC."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise DatasetError(f"Product {product_id} has an invalid timestamp {value!r}")
    try:
        # fromisoformat only learned to read a trailing "Z" in 3.11
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise DatasetError(f"Product {product_id} has an invalid timestamp {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
