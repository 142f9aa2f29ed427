"""
Item catalog service.

In-memory view of current stock levels keyed by item name. Items are
immutable; every change replaces the stored item with an updated copy.
Neither mutation records a ledger entry, that is the caller's job.
"""

from collections.abc import Iterable
from decimal import Decimal

from src.config import get_logger
from src.core.entities.inventory import Item
from src.core.exceptions import (
    InvalidQuantityError,
    ItemNotFoundError,
    ValidationError,
    WouldGoNegativeError,
)

logger = get_logger(__name__)


class ItemCatalog:
    """Current quantity per item, in the order the store returned them."""

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: dict[str, Item] = {}
        for item in items:
            self.add_item(item)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def lookup(self, name: str) -> Item | None:
        """Find an item by exact name."""
        return self._items.get(name)

    def get(self, name: str) -> Item:
        """Find an item by exact name or raise ItemNotFoundError."""
        item = self._items.get(name)
        if item is None:
            raise ItemNotFoundError(name)
        return item

    def list_items(self) -> list[Item]:
        """All items in insertion order."""
        return list(self._items.values())

    def add_item(self, item: Item) -> Item:
        """Register a new item. Names are unique."""
        if item.name in self._items:
            raise ValidationError(
                field="name", message=f"Duplicate item name: {item.name}", value=item.name
            )
        self._items[item.name] = item
        return item

    def apply_delta(self, name: str, signed_amount: Decimal) -> Item:
        """Add a signed amount to an item's quantity.

        Raises:
            ItemNotFoundError: unknown item.
            WouldGoNegativeError: result would be below zero; nothing changes.
        """
        item = self.get(name)
        new_quantity = item.quantity + signed_amount
        if new_quantity < 0:
            raise WouldGoNegativeError(name, item.quantity, signed_amount)

        updated = item.model_copy(update={"quantity": new_quantity})
        self._items[name] = updated
        logger.debug(
            "catalog_delta_applied",
            item_name=name,
            delta=str(signed_amount),
            quantity=str(new_quantity),
        )
        return updated

    def set_quantity(self, name: str, new_quantity: Decimal) -> Item:
        """Overwrite an item's quantity (manual correction path)."""
        if new_quantity < 0:
            raise InvalidQuantityError(new_quantity)
        item = self.get(name)

        updated = item.model_copy(update={"quantity": new_quantity})
        self._items[name] = updated
        logger.debug(
            "catalog_quantity_set",
            item_name=name,
            previous=str(item.quantity),
            quantity=str(new_quantity),
        )
        return updated
