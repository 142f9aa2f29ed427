"""Remote (HTTP) inventory store."""

from src.infrastructure.remote.sheet_store import HttpInventoryStore

__all__ = ["HttpInventoryStore"]
