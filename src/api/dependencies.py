"""
Dependency injection container for FastAPI.

Provides the session state, the store and use case instances to route
handlers. Tests override get_state, get_store and get_app_settings.
"""

from enum import Enum
from functools import lru_cache
from typing import TypeVar

from fastapi import Depends

from src.application.services import (
    get_authenticator,
    get_config_store,
    get_inventory_state,
    get_inventory_store,
    get_report_renderer,
)
from src.application.use_cases import (
    AdjustQuantityUseCase,
    AuthenticateUserUseCase,
    ExportReportUseCase,
    SubmitTransactionUseCase,
)
from src.config import Settings, get_logger, get_settings
from src.core.entities.inventory import Category, TransactionType
from src.core.exceptions import StorageError, ValidationError
from src.core.interfaces import IConfigStore, IInventoryStore
from src.core.services import ALL, InventoryState, SortOrder

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# State and store dependencies
def get_store() -> IInventoryStore:
    """Get the configured inventory store."""
    return get_inventory_store()


async def get_state() -> InventoryState:
    """Get the loaded session state."""
    return await get_inventory_state()


def get_store_config() -> IConfigStore:
    """Get the endpoint configuration store."""
    return get_config_store()


# Use case dependencies
def get_submit_transaction_use_case(
    state: InventoryState = Depends(get_state),
    store: IInventoryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> SubmitTransactionUseCase:
    """Get submit transaction use case."""
    return SubmitTransactionUseCase(
        state=state,
        inventory_store=store,
        default_category=Category(settings.store.default_category),
    )


def get_adjust_quantity_use_case(
    state: InventoryState = Depends(get_state),
    store: IInventoryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AdjustQuantityUseCase:
    """Get adjust quantity use case."""
    return AdjustQuantityUseCase(
        state=state,
        inventory_store=store,
        record_adjustments=settings.inventory.record_adjustments,
    )


def get_export_report_use_case(
    state: InventoryState = Depends(get_state),
    settings: Settings = Depends(get_app_settings),
) -> ExportReportUseCase:
    """Get export report use case."""
    return ExportReportUseCase(
        state=state,
        renderer=get_report_renderer(),
        report_settings=settings.report,
    )


def get_authenticate_user_use_case() -> AuthenticateUserUseCase:
    """Get authenticate user use case."""
    return AuthenticateUserUseCase(authenticator=get_authenticator())


# Helpers shared by routes
async def refresh_after_mutation(
    state: InventoryState,
    store: IInventoryStore,
    settings: Settings,
) -> None:
    """Re-read the store after a committed write when configured to.

    The write already succeeded, so a failed re-read is logged, not raised.
    """
    if not settings.inventory.refresh_after_submit:
        return
    try:
        await state.refresh(store)
    except StorageError as e:
        logger.warning("refresh_after_mutation_failed", error=e.message)


def parse_choice(value: str | None, enum_cls: type[E], field: str) -> E | None:
    """Map a query value onto an enum; None or "All" means no filter."""
    if value is None or value == "" or value == ALL:
        return None
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ValidationError(
            field=field,
            message=f"Must be one of: {', '.join(m.value for m in enum_cls)}",
            value=value,
        ) from e


def parse_category(value: str | None) -> Category | None:
    return parse_choice(value, Category, "category")


def parse_transaction_type(value: str | None) -> TransactionType | None:
    return parse_choice(value, TransactionType, "type")


def parse_sort(value: str | None) -> SortOrder:
    return parse_choice(value, SortOrder, "sort") or SortOrder.NONE
