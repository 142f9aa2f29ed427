"""Tests for InMemoryInventoryStore."""

from decimal import Decimal

import pytest

from src.core.entities.inventory import (
    Category,
    TransactionDraft,
    TransactionType,
)
from src.infrastructure.storage import InMemoryInventoryStore


def _draft(transaction_type: TransactionType, item_name: str, quantity: str, **extra):
    fields = {
        "type": transaction_type,
        "item_name": item_name,
        "quantity": Decimal(quantity),
        "unit": "pcs",
        "location": "Vendor" if transaction_type == TransactionType.RECEIVE else "Ground Floor",
        "person_name": "Rahul",
    }
    fields.update(extra)
    return TransactionDraft(**fields)


class TestSubmit:
    async def test_issue_updates_item_and_ledger(self, memory_store):
        result = await memory_store.submit_transaction(
            _draft(TransactionType.ISSUE, "Tissue Roll", "4")
        )

        assert result.success
        assert result.transaction_id.startswith("TXN-")
        items = {i.name: i for i in await memory_store.fetch_inventory()}
        assert items["Tissue Roll"].quantity == Decimal("6")
        ledger = await memory_store.fetch_transactions()
        assert ledger[-1].id == result.transaction_id
        assert ledger[-1].date == result.committed_at

    async def test_over_issue_fails_atomically(self, memory_store):
        result = await memory_store.submit_transaction(
            _draft(TransactionType.ISSUE, "Tissue Roll", "11")
        )

        assert not result.success
        assert "Insufficient stock" in result.raw_cause
        assert len(await memory_store.fetch_transactions()) == 3

    async def test_issue_unknown_item_fails(self, memory_store):
        result = await memory_store.submit_transaction(
            _draft(TransactionType.ISSUE, "Ghost", "1")
        )
        assert not result.success
        assert result.raw_cause == "Item not found: Ghost"

    async def test_receive_creates_item(self):
        store = InMemoryInventoryStore(default_category=Category.PANTRY)
        result = await store.submit_transaction(
            _draft(TransactionType.RECEIVE, "Rice", "25", unit="kg", min_level=Decimal("5"))
        )

        assert result.success
        [item] = await store.fetch_inventory()
        assert item.id == result.item_id
        assert item.category == Category.PANTRY
        assert item.quantity == Decimal("25")
        assert item.min_level == Decimal("5")

    async def test_fetch_returns_copies(self, memory_store):
        (await memory_store.fetch_inventory()).clear()
        assert len(await memory_store.fetch_inventory()) == 5


class TestUpdateQuantity:
    async def test_records_adjustment(self, memory_store):
        result = await memory_store.update_inventory_quantity(
            "Sugar", Decimal("8"), person_name="Asha", notes="Recount"
        )

        assert result.success
        last = (await memory_store.fetch_transactions())[-1]
        assert last.id == result.transaction_id
        assert last.type == TransactionType.ADJUSTMENT
        assert last.quantity == Decimal("8")
        assert last.unit == "kg"
        assert last.notes == "Recount"

    async def test_without_recording(self, sample_items):
        store = InMemoryInventoryStore(items=sample_items, record_adjustments=False)
        result = await store.update_inventory_quantity("Sugar", Decimal("8"))

        assert result.success
        assert result.transaction_id is None
        assert await store.fetch_transactions() == []

    @pytest.mark.parametrize(
        ("name", "quantity"), [("Ghost", "1"), ("Sugar", "-1")]
    )
    async def test_rejected(self, memory_store, name, quantity):
        result = await memory_store.update_inventory_quantity(name, Decimal(quantity))
        assert not result.success
        items = {i.name: i for i in await memory_store.fetch_inventory()}
        assert items["Sugar"].quantity == Decimal("20")
