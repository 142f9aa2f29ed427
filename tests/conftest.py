"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import get_app_settings, get_state, get_store
from src.api.main import app
from src.config import Settings
from src.core.entities.inventory import Category, Item, Transaction, TransactionType
from src.core.services import InventoryState
from src.infrastructure.storage import InMemoryInventoryStore
from tests.factories import make_item, make_transaction


@pytest.fixture
def sample_items() -> list[Item]:
    return [
        make_item("Tissue Roll", 10, 2),
        make_item("Floor Cleaner", 3, 5, unit="ltr"),
        make_item("Olive Oil", 6, 2, Category.PANTRY, unit="ltr"),
        make_item("Sunflower Oil", 1, 1, Category.PANTRY, unit="ltr"),
        make_item("Sugar", 20, 5, Category.PANTRY, unit="kg"),
    ]


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    return [
        make_transaction(
            "TXN-1", TransactionType.RECEIVE, "Tissue Roll", 10,
            datetime(2024, 1, 10, 9, 0, tzinfo=UTC), location="Vendor",
            person_name="Acme Supplies",
        ),
        make_transaction(
            "TXN-2", TransactionType.ISSUE, "Sugar", 2,
            datetime(2024, 1, 11, 14, 30, tzinfo=UTC), location="Food Court",
        ),
        make_transaction(
            "TXN-3", TransactionType.ISSUE, "Floor Cleaner", 1,
            datetime(2024, 1, 12, 8, 15, tzinfo=UTC), unit="ltr",
        ),
    ]


@pytest.fixture
def memory_store(sample_items, sample_transactions) -> InMemoryInventoryStore:
    return InMemoryInventoryStore(items=sample_items, transactions=sample_transactions)


@pytest.fixture
async def inventory_state(memory_store) -> InventoryState:
    return await InventoryState.load(memory_store)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings isolated from the environment and the real data directory."""
    return Settings(
        _env_file=None,
        storage={"data_dir": tmp_path / "data"},
    )


@pytest.fixture
async def api_client(
    memory_store, inventory_state, test_settings
) -> AsyncGenerator[AsyncClient, None]:
    """API client wired to the in-memory store and a preloaded state."""
    app.dependency_overrides[get_store] = lambda: memory_store
    app.dependency_overrides[get_state] = lambda: inventory_state
    app.dependency_overrides[get_app_settings] = lambda: test_settings
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_store, None)
    app.dependency_overrides.pop(get_state, None)
    app.dependency_overrides.pop(get_app_settings, None)
