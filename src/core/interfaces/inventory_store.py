"""Abstract interfaces for the remote inventory store and its configuration."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.core.entities.inventory import Item, Transaction, TransactionDraft


@dataclass
class StoreResult:
    """Outcome of a mutating store call.

    The store commits all or nothing, so there is no partial-success state.
    Identifiers are filled in when the store assigns them.
    """

    success: bool
    raw_cause: str | None = None
    transaction_id: str | None = None
    item_id: str | None = None
    committed_at: datetime | None = None

    @classmethod
    def failed(cls, raw_cause: str) -> "StoreResult":
        return cls(success=False, raw_cause=raw_cause)


class IInventoryStore(ABC):
    """Interface for the store holding the catalog and the ledger."""

    @abstractmethod
    async def fetch_inventory(self) -> list[Item]:
        """Fetch all items in store order."""
        pass

    @abstractmethod
    async def fetch_transactions(self) -> list[Transaction]:
        """Fetch all ledger entries."""
        pass

    @abstractmethod
    async def submit_transaction(self, draft: TransactionDraft) -> StoreResult:
        """Commit a movement to both ledger and catalog atomically."""
        pass

    @abstractmethod
    async def update_inventory_quantity(
        self,
        item_name: str,
        new_quantity: Decimal,
        person_name: str = "",
        notes: str | None = None,
    ) -> StoreResult:
        """Overwrite an item's quantity (manual correction).

        Stores that keep their own ledger record the override as an
        Adjustment entry attributed to person_name.
        """
        pass


class IConfigStore(ABC):
    """Interface for persisting where the remote store lives."""

    @abstractmethod
    def get_stored_config(self) -> str:
        """Return the saved endpoint, or an empty string."""
        pass

    @abstractmethod
    def save_config(self, endpoint: str) -> None:
        """Persist the endpoint."""
        pass
