"""Tests for the in-memory menu catalog."""

import pytest

from orderhub.core.exceptions import NotFoundError, ValidationError
from orderhub.services.store import InMemoryMenuCatalog


class TestMenuCatalog:

    def test_seeded_items_keep_their_ids(self, catalog):
        assert [item.id for item in catalog.list()] == [1, 2, 3, 4, 5]

    def test_add_assigns_fresh_id_and_marks_available(self, catalog):
        item = catalog.add({
            "id": 1,
            "name": "Jalebi",
            "price": 60,
            "preparationTime": 12,
            "available": False,
        })

        assert item.id not in (1, 2, 3, 4, 5)
        assert item.available is True
        assert item.preparation_time == 12
        assert item.created_at is not None
        assert catalog.get(item.id).name == "Jalebi"

    def test_consecutive_adds_get_distinct_ids(self):
        catalog = InMemoryMenuCatalog()

        ids = {catalog.add({"name": f"Item {n}", "price": 10}).id for n in range(10)}

        assert len(ids) == 10

    def test_add_rejects_non_positive_price(self, catalog):
        with pytest.raises(ValidationError):
            catalog.add({"name": "Free Lunch", "price": 0})

        assert len(catalog.list()) == 5

    def test_update_merges_fields(self, catalog):
        item = catalog.update(4, {"price": 30, "popular": True})

        assert item.name == "Samosa"
        assert item.price == 30
        assert item.popular is True
        assert item.updated_at is not None

    def test_update_cannot_change_id(self, catalog):
        item = catalog.update(4, {"id": 77, "name": "Aloo Samosa"})

        assert item.id == 4
        assert catalog.get(77) is None

    def test_update_unknown_item(self, catalog):
        with pytest.raises(NotFoundError):
            catalog.update(404, {"price": 1})

    def test_remove(self, catalog):
        removed = catalog.remove(2)

        assert removed.name == "Rasgulla"
        assert catalog.get(2) is None
        assert len(catalog.list()) == 4

    def test_remove_unknown_item(self, catalog):
        with pytest.raises(NotFoundError):
            catalog.remove(404)

    def test_set_availability(self, catalog):
        item = catalog.set_availability(3, False)

        assert item.available is False
        assert catalog.get(3).available is False

    def test_list_returns_copies(self, catalog):
        catalog.list()[0].name = "Tampered"

        assert catalog.get(1).name == "Gulab Jamun"
