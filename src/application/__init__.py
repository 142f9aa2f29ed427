"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate the inventory state and store
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
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
    StoreConfigResponse,
    SubmitTransactionResponse,
    TransactionListResponse,
    TransactionResponse,
)
from src.application.services import (
    get_authenticator,
    get_config_store,
    get_inventory_state,
    get_inventory_store,
    get_report_renderer,
    reset_inventory_store,
    reset_services,
)
from src.application.use_cases import (
    AdjustQuantityUseCase,
    AuthenticateUserUseCase,
    ExportReportUseCase,
    SubmitTransactionUseCase,
)

__all__ = [
    # Request DTOs
    "SubmitTransactionRequest",
    "AdjustQuantityRequest",
    "UpdateQuantityRequest",
    "LoginRequest",
    "StoreConfigRequest",
    # Response DTOs
    "ItemResponse",
    "TransactionResponse",
    "InventoryListResponse",
    "TransactionListResponse",
    "SubmitTransactionResponse",
    "AdjustQuantityResponse",
    "InventorySummaryResponse",
    "LoginResponse",
    "StoreConfigResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "SubmitTransactionUseCase",
    "AdjustQuantityUseCase",
    "ExportReportUseCase",
    "AuthenticateUserUseCase",
    # Service factories
    "get_inventory_store",
    "get_inventory_state",
    "get_config_store",
    "get_authenticator",
    "get_report_renderer",
    "reset_inventory_store",
    "reset_services",
]
