"""Sort keys and the OrderBy builder.

Keys added first take precedence: the first key is the primary sort,
the second breaks ties in the first, and so on.
"""

from __future__ import annotations

from enum import Enum

from catalog.domain.exceptions import (
    ConflictingKeyError,
    DuplicateKeyError,
    InvalidKeyError,
)


class OrderByKey(str, Enum):
    """A product field plus a sort direction."""

    CREATED = "created"
    CREATED_DESC = "createdDesc"
    UPDATED = "updated"
    UPDATED_DESC = "updatedDesc"
    NAME = "name"
    NAME_DESC = "nameDesc"
    PRICE = "price"
    PRICE_DESC = "priceDesc"

    @property
    def field(self) -> str:
        """Name of the Product attribute this key sorts on."""
        return _FIELDS[self]

    @property
    def descending(self) -> bool:
        return self.value.endswith("Desc")

    @property
    def mirror(self) -> OrderByKey | None:
        """The same field sorted in the opposite direction."""
        return _MIRRORS.get(self)

    @classmethod
    def parse(cls, raw: str | OrderByKey) -> OrderByKey:
        try:
            return cls(raw)
        except ValueError as exc:
            raise InvalidKeyError(f"Unsupported order by key {raw!r}") from exc


_FIELDS = {
    OrderByKey.CREATED: "created_at",
    OrderByKey.CREATED_DESC: "created_at",
    OrderByKey.UPDATED: "updated_at",
    OrderByKey.UPDATED_DESC: "updated_at",
    OrderByKey.NAME: "name",
    OrderByKey.NAME_DESC: "name",
    OrderByKey.PRICE: "price",
    OrderByKey.PRICE_DESC: "price",
}

_MIRRORS = {
    OrderByKey.CREATED: OrderByKey.CREATED_DESC,
    OrderByKey.CREATED_DESC: OrderByKey.CREATED,
    OrderByKey.UPDATED: OrderByKey.UPDATED_DESC,
    OrderByKey.UPDATED_DESC: OrderByKey.UPDATED,
    OrderByKey.NAME: OrderByKey.NAME_DESC,
    OrderByKey.NAME_DESC: OrderByKey.NAME,
    OrderByKey.PRICE: OrderByKey.PRICE_DESC,
    OrderByKey.PRICE_DESC: OrderByKey.PRICE,
}

# Most recently touched first.
DEFAULT_ORDER = (OrderByKey.UPDATED_DESC, OrderByKey.CREATED_DESC)


class OrderBy:
    """An ordered set of distinct, non-conflicting sort keys."""

    def __init__(self, *keys: str | OrderByKey) -> None:
        self._keys: list[OrderByKey] = []
        for key in keys:
            self.add(key)

    def add(self, key: str | OrderByKey) -> None:
        """Append a key, rejecting unknown, duplicate and conflicting keys."""
        parsed = OrderByKey.parse(key)

        if parsed in self._keys:
            raise DuplicateKeyError(f"Attempted to add duplicate key {parsed.value}")

        if parsed.mirror is not None and parsed.mirror in self._keys:
            raise ConflictingKeyError(
                f"Attempted to add {parsed.value} which conflicts with {parsed.mirror.value}"
            )

        self._keys.append(parsed)

    def materialize(self) -> tuple[OrderByKey, ...]:
        """Return the keys to sort by.

        An empty builder takes on DEFAULT_ORDER the first time this is
        called; the default is stored, so later calls return the same keys.
        """
        if not self._keys:
            self._keys = list(DEFAULT_ORDER)
        return tuple(self._keys)

    @classmethod
    def from_string(cls, raw: str) -> OrderBy:
        """Build from a comma-separated list such as ``"name,priceDesc"``."""
        order_by = cls()
        for part in raw.split(","):
            part = part.strip()
            if part:
                order_by.add(part)
        return order_by

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"OrderBy({', '.join(k.value for k in self._keys)})"
