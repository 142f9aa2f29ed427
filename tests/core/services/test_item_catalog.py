"""Tests for ItemCatalog."""

from decimal import Decimal

import pytest

from src.core.entities.inventory import Category
from src.core.exceptions import (
    InvalidQuantityError,
    ItemNotFoundError,
    ValidationError,
    WouldGoNegativeError,
)
from src.core.services import ItemCatalog
from tests.factories import make_item


@pytest.fixture
def catalog(sample_items) -> ItemCatalog:
    return ItemCatalog(sample_items)


class TestLookup:
    def test_lookup_exact_name(self, catalog):
        assert catalog.lookup("Tissue Roll").quantity == Decimal("10")

    def test_lookup_is_case_sensitive(self, catalog):
        assert catalog.lookup("tissue roll") is None

    def test_get_unknown_raises(self, catalog):
        with pytest.raises(ItemNotFoundError):
            catalog.get("Ghost")

    def test_list_keeps_store_order(self, catalog, sample_items):
        assert [i.name for i in catalog.list_items()] == [i.name for i in sample_items]


class TestAddItem:
    def test_add_new_item(self, catalog):
        catalog.add_item(make_item("Hand Soap", 0, 2))
        assert "Hand Soap" in catalog
        assert len(catalog) == 6

    def test_duplicate_name_rejected(self, catalog):
        with pytest.raises(ValidationError):
            catalog.add_item(make_item("Sugar", 1, 1, Category.PANTRY))


class TestApplyDelta:
    def test_receive_adds(self, catalog):
        item = catalog.apply_delta("Sugar", Decimal("5"))
        assert item.quantity == Decimal("25")
        assert catalog.get("Sugar").quantity == Decimal("25")

    def test_issue_to_exactly_zero(self, catalog):
        item = catalog.apply_delta("Tissue Roll", Decimal("-10"))
        assert item.quantity == 0
        assert item.is_low_stock

    def test_negative_result_rejected_without_change(self, catalog):
        with pytest.raises(WouldGoNegativeError):
            catalog.apply_delta("Tissue Roll", Decimal("-11"))
        assert catalog.get("Tissue Roll").quantity == Decimal("10")

    def test_unknown_item(self, catalog):
        with pytest.raises(ItemNotFoundError):
            catalog.apply_delta("Ghost", Decimal("1"))

    def test_fractional_quantities_exact(self, catalog):
        catalog.apply_delta("Olive Oil", Decimal("-0.1"))
        catalog.apply_delta("Olive Oil", Decimal("-0.2"))
        assert catalog.get("Olive Oil").quantity == Decimal("5.7")


class TestSetQuantity:
    def test_overwrite(self, catalog):
        item = catalog.set_quantity("Sugar", Decimal("3"))
        assert item.quantity == Decimal("3")
        assert item.is_low_stock

    def test_zero_allowed(self, catalog):
        assert catalog.set_quantity("Sugar", Decimal("0")).quantity == 0

    def test_negative_rejected(self, catalog):
        with pytest.raises(InvalidQuantityError):
            catalog.set_quantity("Sugar", Decimal("-1"))
        assert catalog.get("Sugar").quantity == Decimal("20")

    def test_unknown_item(self, catalog):
        with pytest.raises(ItemNotFoundError):
            catalog.set_quantity("Ghost", Decimal("1"))
