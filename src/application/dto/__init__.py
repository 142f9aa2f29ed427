"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    AdjustQuantityRequest,
    LoginRequest,
    StoreConfigRequest,
    SubmitTransactionRequest,
    UpdateQuantityRequest,
)
from src.application.dto.responses import (
    AdjustQuantityResponse,
    ErrorResponse,
    HealthResponse,
    InventoryListResponse,
    InventorySummaryResponse,
    ItemResponse,
    LoginResponse,
    RefreshResponse,
    StoreConfigResponse,
    SubmitTransactionResponse,
    TransactionListResponse,
    TransactionResponse,
)

__all__ = [
    # Requests
    "SubmitTransactionRequest",
    "AdjustQuantityRequest",
    "UpdateQuantityRequest",
    "LoginRequest",
    "StoreConfigRequest",
    # Responses
    "ItemResponse",
    "TransactionResponse",
    "InventoryListResponse",
    "TransactionListResponse",
    "SubmitTransactionResponse",
    "AdjustQuantityResponse",
    "InventorySummaryResponse",
    "LoginResponse",
    "RefreshResponse",
    "StoreConfigResponse",
    "HealthResponse",
    "ErrorResponse",
]
