"""Inventory domain entities."""

import uuid
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """Item categories."""

    HOUSEKEEPING = "Housekeeping"
    PANTRY = "Pantry"


class TransactionType(str, Enum):
    """Types of stock movements."""

    ISSUE = "Issue"
    RECEIVE = "Receive"
    ADJUSTMENT = "Adjustment"


class FloorLocation(str, Enum):
    """Floors that stock can be issued to or stored on."""

    LOWER_GROUND = "Lower Ground"
    GROUND_FLOOR = "Ground Floor"
    FIRST_FLOOR = "First Floor"
    SECOND_FLOOR = "Second Floor"
    THIRD_FLOOR = "Third Floor"
    FOOD_COURT = "Food Court"


# Receive-only pseudo location
VENDOR_LOCATION = "Vendor"


def new_transaction_id() -> str:
    return f"TXN-{uuid.uuid4().hex[:12].upper()}"


def new_item_id() -> str:
    return f"ITM-{uuid.uuid4().hex[:8].upper()}"


def allowed_locations(transaction_type: TransactionType) -> list[str]:
    """Locations a transaction of the given type may name."""
    locations = [loc.value for loc in FloorLocation]
    if transaction_type == TransactionType.RECEIVE:
        locations.append(VENDOR_LOCATION)
    return locations


class Item(BaseModel):
    """Current stock level of a single catalog item."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str  # unique, case-sensitive
    category: Category
    quantity: Decimal = Field(default=Decimal("0"), ge=0)
    unit: str = ""
    min_level: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def is_low_stock(self) -> bool:
        """Low when quantity is at or below the minimum level."""
        return self.quantity <= self.min_level


class Transaction(BaseModel):
    """A committed ledger entry. Never mutated once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: TransactionType
    item_name: str
    # Issue/Receive: moved amount. Adjustment: new on-hand quantity.
    quantity: Decimal = Field(ge=0)
    unit: str = ""
    location: str | None = None
    person_name: str = ""
    notes: str | None = None
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        # Naive timestamps are taken to be UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)


class TransactionDraft(BaseModel):
    """Payload handed to the store when submitting a movement."""

    model_config = ConfigDict(frozen=True)

    type: TransactionType
    item_name: str
    quantity: Decimal = Field(gt=0)
    unit: str
    location: str
    person_name: str
    notes: str | None = None

    # Only used when a Receive onboards an item the catalog does not know
    category: Category | None = None
    min_level: Decimal | None = Field(default=None, ge=0)
