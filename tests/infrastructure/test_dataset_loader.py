"""Tests for loading bootstrap datasets."""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from catalog.domain.exceptions import DatasetError, UnsupportedDatasetError
from catalog.infrastructure.config import InitDataset
from catalog.infrastructure.persistence.dataset_loader import load_dataset, load_dataset_file


class TestBundledDatasets:

    def test_small_dataset(self):
        products = load_dataset(InitDataset.SMALL)
        assert [p.id for p in products] == [str(i) for i in range(1, 21)]

    def test_accepts_string_identifier(self):
        assert len(load_dataset("SMALL")) == 20

    def test_none_dataset_is_empty(self):
        assert load_dataset(InitDataset.NONE) == []

    def test_unknown_dataset_rejected(self):
        with pytest.raises(UnsupportedDatasetError, match="LARGE"):
            load_dataset("LARGE")

    def test_fields_are_parsed(self):
        portal_gun = load_dataset("SMALL")[0]
        assert portal_gun.name == "Portal Gun"
        assert portal_gun.price == Decimal("2499.99")
        assert portal_gun.quantity_in_stock == 1
        assert portal_gun.short_description == "Travel between different dimensions!"
        assert portal_gun.created_at == datetime(2017, 1, 1, tzinfo=timezone.utc)
        assert portal_gun.updated_at == datetime(2018, 1, 1, 0, 0, 20, tzinfo=timezone.utc)

    def test_null_price(self):
        plumbus = load_dataset("SMALL")[2]
        assert plumbus.price is None

    def test_numeric_price_keeps_precision(self):
        battery = load_dataset("SMALL")[3]
        assert battery.price == Decimal("999.00")
        assert isinstance(battery.price, Decimal)


class TestDatasetFile:

    def _write(self, tmp_path, payload) -> object:
        path = tmp_path / "dataset.json"
        path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
        return path

    def test_optional_fields_may_be_absent(self, tmp_path):
        path = self._write(tmp_path, [{"id": "x", "name": "Bare"}])
        [product] = load_dataset_file(path)
        assert product.price is None
        assert product.created_at is None
        assert product.quantity_in_stock == 0

    def test_invalid_json(self, tmp_path):
        with pytest.raises(DatasetError, match="not valid JSON"):
            load_dataset_file(self._write(tmp_path, "[{"))

    def test_not_an_array(self, tmp_path):
        with pytest.raises(DatasetError, match="array"):
            load_dataset_file(self._write(tmp_path, {"id": "1"}))

    def test_missing_id(self, tmp_path):
        with pytest.raises(DatasetError, match="required field"):
            load_dataset_file(self._write(tmp_path, [{"name": "No id"}]))

    def test_bad_price(self, tmp_path):
        with pytest.raises(DatasetError, match="invalid price"):
            load_dataset_file(self._write(tmp_path, [{"id": "1", "name": "n", "price": "cheap"}]))

    def test_bad_timestamp(self, tmp_path):
        path = self._write(tmp_path, [{"id": "1", "name": "n", "createdAt": "yesterday"}])
        with pytest.raises(DatasetError, match="invalid timestamp"):
            load_dataset_file(path)

    def test_timestamp_without_offset_is_utc(self, tmp_path):
        path = self._write(tmp_path, [{"id": "1", "name": "n", "updatedAt": "2018-01-01T00:00:00"}])
        [product] = load_dataset_file(path)
        assert product.updated_at == datetime(2018, 1, 1, tzinfo=timezone.utc)

    def test_numeric_timestamp_rejected(self, tmp_path):
        path = self._write(tmp_path, [{"id": "1", "name": "n", "createdAt": 1500000000}])
        with pytest.raises(DatasetError, match="invalid timestamp"):
            load_dataset_file(path)

    def test_non_numeric_quantity_rejected(self, tmp_path):
        path = self._write(tmp_path, [{"id": "1", "name": "n", "quantityInStock": "lots"}])
        with pytest.raises(DatasetError, match="invalid quantity"):
            load_dataset_file(path)

    def test_negative_quantity_rejected(self, tmp_path):
        path = self._write(tmp_path, [{"id": "1", "name": "n", "quantityInStock": -3}])
        with pytest.raises(DatasetError, match="negative quantity"):
            load_dataset_file(path)

    @pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_price_rejected(self, tmp_path, price):
        path = self._write(tmp_path, [{"id": "1", "name": "n", "price": price}])
        with pytest.raises(DatasetError, match="invalid price"):
            load_dataset_file(path)
