"""Core domain entities."""

from src.core.entities.inventory import (
    VENDOR_LOCATION,
    Category,
    FloorLocation,
    Item,
    Transaction,
    TransactionDraft,
    TransactionType,
    allowed_locations,
    new_item_id,
    new_transaction_id,
)

__all__ = [
    "Category",
    "FloorLocation",
    "Item",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "VENDOR_LOCATION",
    "allowed_locations",
    "new_item_id",
    "new_transaction_id",
]
