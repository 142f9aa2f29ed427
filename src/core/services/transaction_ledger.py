"""Append-only ledger of committed stock movements."""

from collections.abc import Iterable, Iterator, Mapping
from decimal import Decimal

from src.core.entities.inventory import Transaction, TransactionType
from src.core.exceptions import ValidationError


class TransactionLedger:
    """Immutable history of Issue, Receive and Adjustment entries."""

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._entries: list[Transaction] = []
        self._ids: set[str] = set()
        for transaction in transactions:
            self.append(transaction)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._entries)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._ids

    def lookup(self, transaction_id: str) -> Transaction | None:
        """Find an entry by id."""
        if transaction_id not in self._ids:
            return None
        return next(t for t in self._entries if t.id == transaction_id)

    def append(self, transaction: Transaction) -> Transaction:
        """Add a committed entry. Ids are unique."""
        if transaction.id in self._ids:
            raise ValidationError(
                field="id",
                message=f"Duplicate transaction id: {transaction.id}",
                value=transaction.id,
            )
        self._entries.append(transaction)
        self._ids.add(transaction.id)
        return transaction

    def list_transactions(self) -> list[Transaction]:
        """Entries in the order they were appended."""
        return list(self._entries)

    def for_item(self, item_name: str) -> list[Transaction]:
        """Entries referencing one item, in append order."""
        return [t for t in self._entries if t.item_name == item_name]

    def replay(
        self, baseline: Mapping[str, Decimal] | None = None
    ) -> dict[str, Decimal]:
        """Derive per-item quantities by applying entries in date order.

        Receive adds, Issue subtracts, Adjustment sets the quantity outright.
        Items without entries keep their baseline value.
        """
        quantities: dict[str, Decimal] = dict(baseline or {})
        # sorted() is stable, so same-timestamp entries keep append order
        for entry in sorted(self._entries, key=lambda t: t.date):
            current = quantities.get(entry.item_name, Decimal("0"))
            if entry.type == TransactionType.RECEIVE:
                quantities[entry.item_name] = current + entry.quantity
            elif entry.type == TransactionType.ISSUE:
                quantities[entry.item_name] = current - entry.quantity
            else:
                quantities[entry.item_name] = entry.quantity
        return quantities
