"""
Session state: the current catalog and ledger snapshot.

Loaded from the injected store and replaced wholesale on refresh. Also
tracks whether a submit is awaiting the store, so a second one can be
rejected instead of racing it.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from src.config import get_logger
from src.core.exceptions import SubmissionInProgressError
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services.item_catalog import ItemCatalog
from src.core.services.transaction_ledger import TransactionLedger

logger = get_logger(__name__)


class InventoryState:
    """Catalog and ledger for one session."""

    def __init__(
        self,
        catalog: ItemCatalog | None = None,
        ledger: TransactionLedger | None = None,
    ) -> None:
        self.catalog = catalog or ItemCatalog()
        self.ledger = ledger or TransactionLedger()
        self.loaded_at: datetime | None = None
        self._submitting = False

    @classmethod
    async def load(cls, store: IInventoryStore) -> "InventoryState":
        """Build a state from a fresh store read."""
        state = cls()
        await state.refresh(store)
        return state

    async def refresh(self, store: IInventoryStore) -> None:
        """Re-fetch catalog and ledger. Both are swapped in only if both reads succeed."""
        items = await store.fetch_inventory()
        transactions = await store.fetch_transactions()

        self.catalog = ItemCatalog(items)
        self.ledger = TransactionLedger(transactions)
        self.loaded_at = datetime.now(UTC)
        logger.info(
            "inventory_state_refreshed",
            items=len(self.catalog),
            transactions=len(self.ledger),
        )

    @property
    def submitting(self) -> bool:
        return self._submitting

    @asynccontextmanager
    async def submission(self) -> AsyncIterator[None]:
        """Hold the single submit slot for the duration of the block."""
        if self._submitting:
            logger.warning("submit_rejected_in_flight")
            raise SubmissionInProgressError()
        self._submitting = True
        try:
            yield
        finally:
            self._submitting = False
