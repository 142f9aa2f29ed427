"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.core.entities.inventory import Item, Transaction


class ItemResponse(BaseModel):
    """Catalog item response DTO."""

    id: str
    name: str
    category: str
    quantity: float
    unit: str
    min_level: float
    is_low_stock: bool

    @classmethod
    def from_entity(cls, item: Item) -> "ItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            category=item.category.value,
            quantity=float(item.quantity),
            unit=item.unit,
            min_level=float(item.min_level),
            is_low_stock=item.is_low_stock,
        )


class TransactionResponse(BaseModel):
    """Ledger entry response DTO."""

    id: str
    type: str
    item_name: str
    quantity: float
    unit: str
    location: str | None = None
    person_name: str
    notes: str | None = None
    date: datetime

    @classmethod
    def from_entity(cls, transaction: Transaction) -> "TransactionResponse":
        return cls(
            id=transaction.id,
            type=transaction.type.value,
            item_name=transaction.item_name,
            quantity=float(transaction.quantity),
            unit=transaction.unit,
            location=transaction.location,
            person_name=transaction.person_name,
            notes=transaction.notes,
            date=transaction.date,
        )


class InventoryListResponse(BaseModel):
    """Filtered catalog view."""

    items: list[ItemResponse]
    total: int


class TransactionListResponse(BaseModel):
    """Filtered ledger view, newest first."""

    transactions: list[TransactionResponse]
    total: int


class SubmitTransactionResponse(BaseModel):
    """Response for a committed Issue/Receive."""

    transaction: TransactionResponse
    item: ItemResponse
    created: bool = False  # True if the receipt onboarded a new item
    stale: bool = False  # True if the local view did not absorb the change; refresh


class AdjustQuantityResponse(BaseModel):
    """Response for a quantity override."""

    item: ItemResponse
    previous_quantity: float
    adjustment: TransactionResponse | None = None


class InventorySummaryResponse(BaseModel):
    """Dashboard figures."""

    total_items: int
    low_stock_count: int
    category_counts: dict[str, int]
    recent_issues: list[TransactionResponse]
    low_stock_items: list[ItemResponse]


class RefreshResponse(BaseModel):
    """Counts after re-reading the store."""

    items: int
    transactions: int
    loaded_at: datetime


class LoginResponse(BaseModel):
    """Authenticated session details."""

    username: str
    role: str
    login_time: datetime


class StoreConfigResponse(BaseModel):
    """Current remote store configuration."""

    endpoint: str
    backend: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    store_backend: str | None = None
    items_loaded: int | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
