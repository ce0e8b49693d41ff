"""Unit tests for sort keys and the OrderBy builder."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from catalog.domain.exceptions import (
    ConflictingKeyError,
    DuplicateKeyError,
    InvalidKeyError,
    ValidationError,
)
from catalog.domain.model.ordering import DEFAULT_ORDER, OrderBy, OrderByKey


# ── OrderByKey ───────────────────────────────────────────────────────────────


class TestOrderByKey:

    @pytest.mark.parametrize("key", list(OrderByKey))
    def test_every_key_has_a_mirror_on_the_same_field(self, key):
        assert key.mirror is not None
        assert key.mirror.field == key.field
        assert key.mirror.descending != key.descending
        assert key.mirror.mirror is key

    def test_updated_mirrors_updated_desc(self):
        assert OrderByKey.UPDATED.mirror is OrderByKey.UPDATED_DESC

    def test_parse_wire_value(self):
        assert OrderByKey.parse("priceDesc") is OrderByKey.PRICE_DESC

    def test_parse_unknown_value(self):
        with pytest.raises(InvalidKeyError, match="Unsupported"):
            OrderByKey.parse("colour")


# ── OrderBy.add ──────────────────────────────────────────────────────────────


class TestOrderByAdd:

    def test_add_single_key(self):
        order_by = OrderBy()
        order_by.add(OrderByKey.CREATED)
        assert order_by.materialize() == (OrderByKey.CREATED,)

    def test_add_preserves_insertion_order(self):
        order_by = OrderBy()
        order_by.add(OrderByKey.CREATED)
        order_by.add(OrderByKey.UPDATED)
        assert order_by.materialize() == (OrderByKey.CREATED, OrderByKey.UPDATED)

    def test_add_accepts_wire_strings(self):
        order_by = OrderBy("name", "priceDesc")
        assert order_by.materialize() == (OrderByKey.NAME, OrderByKey.PRICE_DESC)

    def test_duplicate_rejected(self):
        order_by = OrderBy(OrderByKey.CREATED)
        with pytest.raises(DuplicateKeyError, match="duplicate"):
            order_by.add(OrderByKey.CREATED)

    @pytest.mark.parametrize("key", list(OrderByKey))
    def test_mirror_after_key_rejected(self, key):
        order_by = OrderBy(key)
        with pytest.raises(ConflictingKeyError, match="conflicts"):
            order_by.add(key.mirror)

    def test_name_then_name_desc_rejected(self):
        order_by = OrderBy(OrderByKey.NAME)
        with pytest.raises(ConflictingKeyError):
            order_by.add("nameDesc")

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidKeyError):
            OrderBy().add("Unknown")

    def test_errors_are_validation_errors(self):
        with pytest.raises(ValidationError):
            OrderBy("name", "name")

    def test_failed_add_leaves_builder_unchanged(self):
        order_by = OrderBy(OrderByKey.PRICE)
        with pytest.raises(ConflictingKeyError):
            order_by.add(OrderByKey.PRICE_DESC)
        assert order_by.materialize() == (OrderByKey.PRICE,)


# ── OrderBy.materialize ──────────────────────────────────────────────────────


class TestOrderByMaterialize:

    def test_empty_builder_defaults(self):
        assert OrderBy().materialize() == (OrderByKey.UPDATED_DESC, OrderByKey.CREATED_DESC)
        assert DEFAULT_ORDER == (OrderByKey.UPDATED_DESC, OrderByKey.CREATED_DESC)

    def test_default_is_idempotent(self):
        order_by = OrderBy()
        first = order_by.materialize()
        second = order_by.materialize()
        assert first == second
        assert len(second) == 2

    def test_default_is_remembered(self):
        order_by = OrderBy()
        order_by.materialize()
        with pytest.raises(DuplicateKeyError):
            order_by.add(OrderByKey.UPDATED_DESC)

    def test_returned_keys_are_a_snapshot(self):
        order_by = OrderBy(OrderByKey.NAME)
        keys = order_by.materialize()
        order_by.add(OrderByKey.PRICE)
        assert keys == (OrderByKey.NAME,)


class TestOrderByFromString:

    def test_parses_comma_separated_keys(self):
        order_by = OrderBy.from_string("createdDesc, name")
        assert order_by.materialize() == (OrderByKey.CREATED_DESC, OrderByKey.NAME)

    def test_empty_string_is_empty_builder(self):
        assert len(OrderBy.from_string("")) == 0

    def test_conflict_in_string_rejected(self):
        with pytest.raises(ConflictingKeyError):
            OrderBy.from_string("price,priceDesc")


class TestOrderBySharing:

    def test_concurrent_materialize_on_shared_builder(self):
        order_by = OrderBy()
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: order_by.materialize(), range(64)))
        assert all(result == DEFAULT_ORDER for result in results)
        assert order_by.materialize() == DEFAULT_ORDER
