"""Tests for InventoryState."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.core.exceptions import StoreUnavailableError, SubmissionInProgressError
from src.core.services import InventoryState
from tests.factories import make_item


class TestLoad:
    async def test_load_reads_catalog_and_ledger(self, memory_store):
        state = await InventoryState.load(memory_store)
        assert len(state.catalog) == 5
        assert len(state.ledger) == 3
        assert state.loaded_at is not None

    async def test_new_state_is_empty(self):
        state = InventoryState()
        assert len(state.catalog) == 0
        assert state.loaded_at is None


class TestRefresh:
    async def test_refresh_replaces_snapshot(self, inventory_state, memory_store):
        inventory_state.catalog.apply_delta("Sugar", Decimal("-5"))
        await inventory_state.refresh(memory_store)
        assert inventory_state.catalog.get("Sugar").quantity == 20

    async def test_failed_read_keeps_previous_snapshot(self, inventory_state):
        store = AsyncMock()
        store.fetch_inventory.return_value = [make_item("Only One")]
        store.fetch_transactions.side_effect = StoreUnavailableError(
            "fetch_transactions", "timeout"
        )
        before = inventory_state.catalog

        with pytest.raises(StoreUnavailableError):
            await inventory_state.refresh(store)

        assert inventory_state.catalog is before
        assert "Only One" not in inventory_state.catalog


class TestSubmissionSlot:
    async def test_second_submission_rejected(self):
        state = InventoryState()
        async with state.submission():
            assert state.submitting
            with pytest.raises(SubmissionInProgressError):
                async with state.submission():
                    pass
        assert not state.submitting

    async def test_slot_released_on_error(self):
        state = InventoryState()
        with pytest.raises(RuntimeError):
            async with state.submission():
                raise RuntimeError("boom")
        assert not state.submitting
