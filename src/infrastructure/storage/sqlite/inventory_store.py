"""SQLite implementation of the inventory store."""

from datetime import UTC, datetime
from decimal import Decimal

import aiosqlite

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
from src.core.exceptions import DatabaseError, StoreUnavailableError
from src.core.interfaces.inventory_store import IInventoryStore, StoreResult
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """Catalog and ledger in one SQLite database.

    A submit reads the item, checks stock, updates the quantity and inserts
    the ledger row inside a single write transaction.
    """

    def __init__(
        self,
        default_category: Category = Category.HOUSEKEEPING,
        record_adjustments: bool = True,
    ):
        self._default_category = default_category
        self._record_adjustments = record_adjustments

    async def fetch_inventory(self) -> list[Item]:
        """All items in insertion order."""
        try:
            async with get_connection() as conn:
                cursor = await conn.execute("SELECT * FROM items ORDER BY seq")
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error("inventory_fetch_failed", error=str(e))
            raise StoreUnavailableError("fetch_inventory", str(e)) from e
        return [self._row_to_item(row) for row in rows]

    async def fetch_transactions(self) -> list[Transaction]:
        """All ledger rows in insertion order."""
        try:
            async with get_connection() as conn:
                cursor = await conn.execute("SELECT * FROM transactions ORDER BY seq")
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error("transactions_fetch_failed", error=str(e))
            raise StoreUnavailableError("fetch_transactions", str(e)) from e
        return [self._row_to_transaction(row) for row in rows]

    async def add_item(self, item: Item) -> Item:
        """Insert a catalog item directly (seeding and tests)."""
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO items (id, name, category, quantity, unit, min_level, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        item.id,
                        item.name,
                        item.category.value,
                        str(item.quantity),
                        item.unit,
                        str(item.min_level),
                        datetime.now(UTC).isoformat(),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DatabaseError("add_item", str(e)) from e
        logger.info("inventory_item_created", item_id=item.id, name=item.name)
        return item

    async def submit_transaction(self, draft: TransactionDraft) -> StoreResult:
        """Apply a movement and append it to the ledger in one commit."""
        now = datetime.now(UTC)
        transaction_id = new_transaction_id()

        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "SELECT id, quantity FROM items WHERE name = ?", (draft.item_name,)
                )
                row = await cursor.fetchone()

                if row is None:
                    if draft.type != TransactionType.RECEIVE:
                        return StoreResult.failed(f"Item not found: {draft.item_name}")
                    item_id = new_item_id()
                    current = Decimal("0")
                    await conn.execute(
                        """
                        INSERT INTO items (id, name, category, quantity, unit, min_level, updated_at)
                        VALUES (?, ?, ?, '0', ?, ?, ?)
                        """,
                        (
                            item_id,
                            draft.item_name,
                            (draft.category or self._default_category).value,
                            draft.unit,
                            str(draft.min_level or Decimal("0")),
                            now.isoformat(),
                        ),
                    )
                else:
                    item_id = row["id"]
                    current = Decimal(row["quantity"])

                if draft.type == TransactionType.ISSUE:
                    if draft.quantity > current:
                        return StoreResult.failed(
                            f"Insufficient stock for {draft.item_name}: {current} available"
                        )
                    new_quantity = current - draft.quantity
                else:
                    new_quantity = current + draft.quantity

                await conn.execute(
                    "UPDATE items SET quantity = ?, updated_at = ? WHERE id = ?",
                    (str(new_quantity), now.isoformat(), item_id),
                )
                await self._insert_transaction(
                    conn,
                    transaction_id,
                    draft.type,
                    draft.item_name,
                    draft.quantity,
                    draft.unit,
                    draft.location,
                    draft.person_name,
                    draft.notes,
                    now,
                )
        except aiosqlite.Error as e:
            logger.error("transaction_submit_failed", item_name=draft.item_name, error=str(e))
            return StoreResult.failed(str(e))

        logger.info(
            "transaction_submitted",
            transaction_id=transaction_id,
            type=draft.type.value,
            item_name=draft.item_name,
            quantity=str(new_quantity),
        )
        return StoreResult(
            success=True,
            transaction_id=transaction_id,
            item_id=item_id,
            committed_at=now,
        )

    async def update_inventory_quantity(
        self,
        item_name: str,
        new_quantity: Decimal,
        person_name: str = "",
        notes: str | None = None,
    ) -> StoreResult:
        """Overwrite the quantity, recording an Adjustment row when enabled."""
        if new_quantity < 0:
            return StoreResult.failed("Quantity must not be negative")

        now = datetime.now(UTC)
        transaction_id = new_transaction_id() if self._record_adjustments else None

        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "SELECT id, unit FROM items WHERE name = ?", (item_name,)
                )
                row = await cursor.fetchone()
                if row is None:
                    return StoreResult.failed(f"Item not found: {item_name}")

                await conn.execute(
                    "UPDATE items SET quantity = ?, updated_at = ? WHERE id = ?",
                    (str(new_quantity), now.isoformat(), row["id"]),
                )
                if transaction_id:
                    await self._insert_transaction(
                        conn,
                        transaction_id,
                        TransactionType.ADJUSTMENT,
                        item_name,
                        new_quantity,
                        row["unit"],
                        None,
                        person_name,
                        notes,
                        now,
                    )
        except aiosqlite.Error as e:
            logger.error("quantity_update_failed", item_name=item_name, error=str(e))
            return StoreResult.failed(str(e))

        logger.info("inventory_quantity_updated", item_name=item_name, quantity=str(new_quantity))
        return StoreResult(
            success=True,
            transaction_id=transaction_id,
            item_id=row["id"],
            committed_at=now,
        )

    @staticmethod
    async def _insert_transaction(
        conn: aiosqlite.Connection,
        transaction_id: str,
        transaction_type: TransactionType,
        item_name: str,
        quantity: Decimal,
        unit: str,
        location: str | None,
        person_name: str,
        notes: str | None,
        when: datetime,
    ) -> None:
        await conn.execute(
            """
            INSERT INTO transactions (
                id, type, item_name, quantity, unit,
                location, person_name, notes, date
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                transaction_id,
                transaction_type.value,
                item_name,
                str(quantity),
                unit,
                location,
                person_name,
                notes,
                when.isoformat(),
            ),
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> Item:
        """Convert a database row to an Item entity."""
        return Item(
            id=row["id"],
            name=row["name"],
            category=Category(row["category"]),
            quantity=Decimal(row["quantity"]),
            unit=row["unit"],
            min_level=Decimal(row["min_level"]),
        )

    @staticmethod
    def _row_to_transaction(row: aiosqlite.Row) -> Transaction:
        """Convert a database row to a Transaction entity."""
        return Transaction(
            id=row["id"],
            type=TransactionType(row["type"]),
            item_name=row["item_name"],
            quantity=Decimal(row["quantity"]),
            unit=row["unit"],
            location=row["location"],
            person_name=row["person_name"],
            notes=row["notes"],
            date=datetime.fromisoformat(row["date"]),
        )
