"""Unit tests for MaterialCatalog and the material model."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from models.material import MaterialRecord
from services.material_catalog import MaterialCatalog


class TestMaterialRecord:
    """Tests for MaterialRecord parsing."""

    def test_price_alias(self):
        """The JSON 'price' key populates unit_price."""
        record = MaterialRecord.model_validate(
            {"id": 1, "name": "Cement", "category": "Cement & Concrete", "price": 400, "unit": "bag"}
        )

        assert record.unit_price == 400
        assert record.to_api_dict()["price"] == 400
        assert "image" not in record.to_api_dict()

    def test_non_positive_price_rejected(self):
        with pytest.raises(PydanticValidationError):
            MaterialRecord(id=1, name="Free", category="Misc", unit="kg", price=0)


class TestMaterialCatalog:
    """Tests for catalog lookup and resolution."""

    def test_lookup_hit(self, catalog):
        material = catalog.lookup(3)

        assert material is not None
        assert material.name == "Vitrified Tiles"
        assert material.unit_price == 50

    def test_lookup_miss_returns_none(self, catalog):
        assert catalog.lookup(999) is None
        assert 999 not in catalog
        assert 1 in catalog

    def test_resolve_skips_unknown_ids(self, catalog):
        """Unknown ids are dropped and known ones keep their order."""
        resolved = catalog.resolve([4, 999, 1])

        assert [m.id for m in resolved] == [4, 1]

    def test_resolve_keeps_duplicates(self, catalog):
        assert [m.id for m in catalog.resolve([2, 2])] == [2, 2]

    def test_resolve_empty(self, catalog):
        assert catalog.resolve([]) == []

    def test_malformed_records_skipped(self, sample_materials):
        """Records failing validation are left out of the catalog."""
        records = sample_materials + [{"id": 50, "name": "No price", "category": "Misc", "unit": "kg"}]

        catalog = MaterialCatalog(records)

        assert len(catalog) == len(sample_materials)
        assert catalog.lookup(50) is None

    def test_duplicate_ids_keep_first(self):
        catalog = MaterialCatalog([
            {"id": 1, "name": "First", "category": "Misc", "price": 10, "unit": "kg"},
            {"id": 1, "name": "Second", "category": "Misc", "price": 20, "unit": "kg"},
        ])

        assert len(catalog) == 1
        assert catalog.lookup(1).name == "First"

    def test_all_in_load_order(self, catalog, sample_materials):
        assert [m.id for m in catalog.all()] == [m["id"] for m in sample_materials]
