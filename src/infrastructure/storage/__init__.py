"""Storage infrastructure implementations."""

from src.infrastructure.storage.config_store import FileConfigStore, validate_endpoint
from src.infrastructure.storage.memory_store import InMemoryInventoryStore
from src.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # Stores
    "InMemoryInventoryStore",
    "SQLiteInventoryStore",
    "FileConfigStore",
    "validate_endpoint",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
