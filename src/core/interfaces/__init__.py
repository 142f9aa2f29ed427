"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.auth import IAuthenticator
from src.core.interfaces.inventory_store import IConfigStore, IInventoryStore, StoreResult

__all__ = [
    "IAuthenticator",
    "IConfigStore",
    "IInventoryStore",
    "StoreResult",
]
