"""
Domain exceptions for the stockroom application.

Validation errors are raised before any store call and leave all state
unchanged. Remote failures carry the raw cause reported by the store.
"""

from decimal import Decimal
from typing import Any


class StockroomError(Exception):
    """Base exception for all stockroom errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(StockroomError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidQuantityError(ValidationError):
    """Quantity is zero, negative or not a number where that is not allowed."""

    def __init__(self, quantity: Any, reason: str = "must not be negative"):
        super().__init__(field="quantity", message=f"Quantity {reason}", value=quantity)
        self.code = "INVALID_QUANTITY"


class ItemNotFoundError(ValidationError):
    """Item name does not resolve in the catalog."""

    def __init__(self, item_name: str):
        super().__init__(
            field="item_name",
            message=f"Item not found: {item_name}",
            value=item_name,
        )
        self.code = "ITEM_NOT_FOUND"
        self.details["item_name"] = item_name


class InsufficientStockError(ValidationError):
    """Issue quantity exceeds the quantity on hand."""

    def __init__(
        self,
        item_name: str,
        requested: Decimal,
        available: Decimal,
        unit: str = "",
    ):
        available_text = f"{available} {unit}".strip()
        super().__init__(
            field="quantity",
            message=f"Insufficient stock! Only {available_text} available.",
            value=requested,
        )
        self.code = "INSUFFICIENT_STOCK"
        self.requested = requested
        self.available = available
        self.details.update(
            {
                "item_name": item_name,
                "requested": str(requested),
                "available": str(available),
                "unit": unit,
            }
        )


class WouldGoNegativeError(ValidationError):
    """Applying a delta would drive an item's quantity below zero."""

    def __init__(self, item_name: str, quantity: Decimal, delta: Decimal):
        super().__init__(
            field="quantity",
            message=f"Applying {delta} to {item_name} ({quantity}) would go negative",
            value=delta,
        )
        self.code = "WOULD_GO_NEGATIVE"
        self.details.update(
            {"item_name": item_name, "quantity": str(quantity), "delta": str(delta)}
        )


class InvalidLocationError(ValidationError):
    """Location is not allowed for the transaction type."""

    def __init__(self, location: str, allowed: list[str]):
        super().__init__(
            field="location",
            message=f"Unsupported location '{location}'. Allowed: {', '.join(allowed)}",
            value=location,
        )
        self.code = "INVALID_LOCATION"
        self.details["allowed"] = allowed


class SubmissionInProgressError(ValidationError):
    """Another submit is still awaiting the store in this session."""

    def __init__(self):
        super().__init__(
            field="submit",
            message="A previous submission is still in progress",
        )
        self.code = "SUBMISSION_IN_PROGRESS"


# Remote store exceptions
class RemoteFailureError(StockroomError):
    """The store reported failure or could not complete the call."""

    def __init__(self, operation: str, raw_cause: str | None = None):
        super().__init__(
            f"Failed to record {operation}. Check connection.",
            code="REMOTE_FAILURE",
            details={"operation": operation, "raw_cause": raw_cause},
        )
        self.raw_cause = raw_cause


# Storage Exceptions
class StorageError(StockroomError):
    """Base exception for storage operations."""

    pass


class StoreUnavailableError(StorageError):
    """Reading from the store failed."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Store unavailable during {operation}: {reason}",
            code="STORE_UNAVAILABLE",
            details={"operation": operation, "reason": reason},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class AuthenticationError(StockroomError):
    """Credentials were rejected."""

    def __init__(self, username: str):
        super().__init__(
            "Invalid username or password",
            code="AUTHENTICATION_FAILED",
            details={"username": username},
        )


class ConfigurationError(StockroomError):
    """Configuration error."""

    pass
