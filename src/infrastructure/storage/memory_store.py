"""In-process inventory store.

Default backend for development and the store double used across tests.
Mirrors the commit rules of the persistent stores: a movement either
updates both catalog and ledger or neither.
"""

import asyncio
from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import Decimal

from src.config import get_logger
from src.core.entities.inventory import (
    Category,
    Item,
    Transaction,
    TransactionDraft,
    TransactionType,
    new_item_id,
    new_transaction_id,
)
from src.core.interfaces.inventory_store import IInventoryStore, StoreResult

logger = get_logger(__name__)


class InMemoryInventoryStore(IInventoryStore):
    """Dict-backed catalog plus list-backed ledger."""

    def __init__(
        self,
        items: Iterable[Item] = (),
        transactions: Iterable[Transaction] = (),
        default_category: Category = Category.HOUSEKEEPING,
        record_adjustments: bool = True,
    ):
        self._items: dict[str, Item] = {item.name: item for item in items}
        self._transactions: list[Transaction] = list(transactions)
        self._default_category = default_category
        self._record_adjustments = record_adjustments
        self._lock = asyncio.Lock()

    async def fetch_inventory(self) -> list[Item]:
        return list(self._items.values())

    async def fetch_transactions(self) -> list[Transaction]:
        return list(self._transactions)

    async def submit_transaction(self, draft: TransactionDraft) -> StoreResult:
        async with self._lock:
            item = self._items.get(draft.item_name)

            if item is None:
                if draft.type != TransactionType.RECEIVE:
                    return StoreResult.failed(f"Item not found: {draft.item_name}")
                item = Item(
                    id=new_item_id(),
                    name=draft.item_name,
                    category=draft.category or self._default_category,
                    unit=draft.unit,
                    min_level=draft.min_level or Decimal("0"),
                )

            if draft.type == TransactionType.ISSUE:
                if draft.quantity > item.quantity:
                    return StoreResult.failed(
                        f"Insufficient stock for {draft.item_name}: {item.quantity} available"
                    )
                new_quantity = item.quantity - draft.quantity
            else:
                new_quantity = item.quantity + draft.quantity

            now = datetime.now(UTC)
            transaction = Transaction(
                id=new_transaction_id(),
                type=draft.type,
                item_name=draft.item_name,
                quantity=draft.quantity,
                unit=draft.unit,
                location=draft.location,
                person_name=draft.person_name,
                notes=draft.notes,
                date=now,
            )

            self._items[item.name] = item.model_copy(update={"quantity": new_quantity})
            self._transactions.append(transaction)

        logger.debug(
            "memory_store_transaction",
            transaction_id=transaction.id,
            item_name=draft.item_name,
            quantity=str(new_quantity),
        )
        return StoreResult(
            success=True,
            transaction_id=transaction.id,
            item_id=item.id,
            committed_at=now,
        )

    async def update_inventory_quantity(
        self,
        item_name: str,
        new_quantity: Decimal,
        person_name: str = "",
        notes: str | None = None,
    ) -> StoreResult:
        async with self._lock:
            item = self._items.get(item_name)
            if item is None:
                return StoreResult.failed(f"Item not found: {item_name}")
            if new_quantity < 0:
                return StoreResult.failed("Quantity must not be negative")

            now = datetime.now(UTC)
            self._items[item_name] = item.model_copy(update={"quantity": new_quantity})

            transaction_id = None
            if self._record_adjustments:
                transaction_id = new_transaction_id()
                self._transactions.append(
                    Transaction(
                        id=transaction_id,
                        type=TransactionType.ADJUSTMENT,
                        item_name=item_name,
                        quantity=new_quantity,
                        unit=item.unit,
                        person_name=person_name,
                        notes=notes,
                        date=now,
                    )
                )

        return StoreResult(
            success=True,
            transaction_id=transaction_id,
            item_id=item.id,
            committed_at=now,
        )
