"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.core.entities.inventory import Category, TransactionType


class SubmitTransactionRequest(BaseModel):
    """Request to record an Issue or Receive movement.

    Quantity sign and required text fields are checked by the use case so
    that every rejection surfaces as the same domain error type.
    """

    type: TransactionType = Field(..., description="Issue or Receive")
    item_name: str = Field(..., description="Catalog item name (exact)")
    quantity: Decimal = Field(..., description="Amount moved, must be positive")
    unit: str = Field(default="", description="Unit of measure, e.g. pcs, kg")
    location: str = Field(
        default="",
        description="Floor location, or Vendor for receipts",
        examples=["Ground Floor", "Vendor"],
    )
    person_name: str = Field(
        default="",
        description="Receiving staff member or supplier/deliverer",
        examples=["Rahul (HK Supervisor)"],
    )
    notes: str | None = Field(default=None, description="Additional notes")

    # New item onboarding (Receive only)
    category: Category | None = Field(
        default=None, description="Category for an item not yet in the catalog"
    )
    min_level: Decimal | None = Field(
        default=None, ge=0, description="Minimum level for a new item"
    )


class AdjustQuantityRequest(BaseModel):
    """Request to overwrite an item's quantity (manual correction)."""

    item_name: str = Field(..., description="Catalog item name (exact)")
    quantity: Decimal = Field(..., description="New on-hand quantity")
    person_name: str = Field(default="", description="Who made the correction")
    notes: str | None = Field(default=None, description="Reason for the correction")


class UpdateQuantityRequest(BaseModel):
    """Body of the quantity override endpoint."""

    quantity: Decimal = Field(..., description="New on-hand quantity")
    person_name: str = Field(default="", description="Who made the correction")
    notes: str | None = Field(default=None, description="Reason for the correction")


class LoginRequest(BaseModel):
    """Credentials for the built-in authenticator."""

    username: str = Field(..., description="Username (case-insensitive)")
    password: str = Field(..., description="Password")


class StoreConfigRequest(BaseModel):
    """Where the remote inventory store lives."""

    endpoint: str = Field(
        ...,
        description="Store web endpoint URL",
        examples=["https://script.example.com/macros/s/abc/exec"],
    )
