"""Tests for the service factory functions."""

from unittest.mock import patch

import pytest

from src.application import services
from src.config import Settings
from src.core.exceptions import ConfigurationError
from src.infrastructure.remote import HttpInventoryStore
from src.infrastructure.storage import InMemoryInventoryStore, SQLiteInventoryStore


@pytest.fixture(autouse=True)
def clean_services():
    services.reset_services()
    yield
    services.reset_services()


def _settings(tmp_path, **store) -> Settings:
    return Settings(_env_file=None, storage={"data_dir": tmp_path}, store=store)


class TestInventoryStoreFactory:
    def test_memory_backend_is_seeded(self, tmp_path):
        with patch.object(services, "get_settings", return_value=_settings(tmp_path)):
            store = services.get_inventory_store()
            assert isinstance(store, InMemoryInventoryStore)
            assert services.get_inventory_store() is store

    async def test_memory_state_loads_demo_items(self, tmp_path):
        with patch.object(services, "get_settings", return_value=_settings(tmp_path)):
            state = await services.get_inventory_state()
        assert len(state.catalog) == len(services.DEMO_ITEMS)
        assert services.get_loaded_state() is state

    def test_sqlite_backend(self, tmp_path):
        settings = _settings(tmp_path, backend="sqlite")
        with patch.object(services, "get_settings", return_value=settings):
            assert isinstance(services.get_inventory_store(), SQLiteInventoryStore)

    def test_http_backend_requires_endpoint(self, tmp_path):
        settings = _settings(tmp_path, backend="http")
        with patch.object(services, "get_settings", return_value=settings):
            with pytest.raises(ConfigurationError):
                services.get_inventory_store()

    def test_http_backend_uses_saved_endpoint(self, tmp_path):
        settings = _settings(tmp_path, backend="http")
        with patch.object(services, "get_settings", return_value=settings):
            services.get_config_store().save_config("https://sheet.example.com/exec")
            store = services.get_inventory_store()
        assert isinstance(store, HttpInventoryStore)
        assert store.endpoint == "https://sheet.example.com/exec"

    def test_reset_drops_store_and_state(self, tmp_path):
        with patch.object(services, "get_settings", return_value=_settings(tmp_path)):
            first = services.get_inventory_store()
            services.reset_inventory_store()
            assert services.get_inventory_store() is not first
            assert services.get_loaded_state() is None
