"""
Service factory functions for dependency injection.

This module wires infrastructure implementations to the core inventory
state. Use cases and API dependencies should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from decimal import Decimal
from typing import TYPE_CHECKING

from src.config import get_logger, get_settings
from src.core.entities.inventory import Category, Item
from src.core.exceptions import ConfigurationError
from src.core.services import InventoryState

if TYPE_CHECKING:
    from src.core.interfaces import (
        IAuthenticator,
        IConfigStore,
        IInventoryStore,
    )
    from src.core.services import IReportPdfRenderer

logger = get_logger(__name__)


# Catalog the in-memory backend starts with in development
DEMO_ITEMS: tuple[Item, ...] = (
    Item(
        id="ITM-001",
        name="Tissue Roll",
        category=Category.HOUSEKEEPING,
        quantity=Decimal("40"),
        unit="pcs",
        min_level=Decimal("10"),
    ),
    Item(
        id="ITM-002",
        name="Floor Cleaner",
        category=Category.HOUSEKEEPING,
        quantity=Decimal("12"),
        unit="ltr",
        min_level=Decimal("5"),
    ),
    Item(
        id="ITM-003",
        name="Garbage Bags",
        category=Category.HOUSEKEEPING,
        quantity=Decimal("4"),
        unit="pack",
        min_level=Decimal("6"),
    ),
    Item(
        id="ITM-004",
        name="Sunflower Oil",
        category=Category.PANTRY,
        quantity=Decimal("8"),
        unit="ltr",
        min_level=Decimal("3"),
    ),
    Item(
        id="ITM-005",
        name="Tea Bags",
        category=Category.PANTRY,
        quantity=Decimal("200"),
        unit="pcs",
        min_level=Decimal("50"),
    ),
)


# Singleton instances
_inventory_store: "IInventoryStore | None" = None
_inventory_state: InventoryState | None = None
_config_store: "IConfigStore | None" = None
_authenticator: "IAuthenticator | None" = None
_report_renderer: "IReportPdfRenderer | None" = None


def get_config_store() -> "IConfigStore":
    """Get or create the endpoint configuration store."""
    global _config_store

    if _config_store is None:
        from src.infrastructure.storage import FileConfigStore

        settings = get_settings()
        _config_store = FileConfigStore(
            path=settings.storage.config_path,
            fallback=settings.store.endpoint_url,
        )
    return _config_store


def get_inventory_store() -> "IInventoryStore":
    """
    Get or create the inventory store for the configured backend.

    Returns:
        InMemoryInventoryStore, SQLiteInventoryStore or HttpInventoryStore

    Raises:
        ConfigurationError: http backend selected without an endpoint
    """
    global _inventory_store

    if _inventory_store is not None:
        return _inventory_store

    settings = get_settings()
    backend = settings.store.backend
    default_category = Category(settings.store.default_category)
    record_adjustments = settings.inventory.record_adjustments

    # Lazy import infrastructure to avoid circular imports
    if backend == "sqlite":
        from src.infrastructure.storage.sqlite import SQLiteInventoryStore

        store: IInventoryStore = SQLiteInventoryStore(
            default_category=default_category,
            record_adjustments=record_adjustments,
        )
    elif backend == "http":
        from src.infrastructure.remote import HttpInventoryStore

        endpoint = get_config_store().get_stored_config()
        if not endpoint:
            raise ConfigurationError(
                "No store endpoint configured",
                details={"backend": backend},
            )
        store = HttpInventoryStore(
            endpoint,
            timeout=settings.store.timeout,
            record_adjustments=record_adjustments,
        )
    else:
        from src.infrastructure.storage import InMemoryInventoryStore

        store = InMemoryInventoryStore(
            items=DEMO_ITEMS,
            default_category=default_category,
            record_adjustments=record_adjustments,
        )

    logger.info("inventory_store_created", backend=backend)
    _inventory_store = store
    return store


async def get_inventory_state() -> InventoryState:
    """
    Get or load the session's inventory state.

    Async because the first call reads catalog and ledger from the store.
    """
    global _inventory_state

    if _inventory_state is None:
        _inventory_state = await InventoryState.load(get_inventory_store())
    return _inventory_state


def get_loaded_state() -> InventoryState | None:
    """Return the state if it has been loaded, without touching the store."""
    return _inventory_state


def get_authenticator() -> "IAuthenticator":
    """Get or create the authenticator backed by the configured user list."""
    global _authenticator

    if _authenticator is None:
        from src.infrastructure.auth import StaticAuthenticator

        _authenticator = StaticAuthenticator(get_settings().auth.users)
    return _authenticator


def get_report_renderer() -> "IReportPdfRenderer":
    """Get or create the PDF report renderer."""
    global _report_renderer

    if _report_renderer is None:
        from src.infrastructure.pdf import Fpdf2ReportRenderer

        _report_renderer = Fpdf2ReportRenderer(get_settings().report)
    return _report_renderer


def reset_inventory_store() -> None:
    """Drop the store and the state loaded from it (endpoint changed)."""
    global _inventory_store
    global _inventory_state

    _inventory_store = None
    _inventory_state = None


def reset_services() -> None:
    """
    Reset all singleton instances.

    Useful for testing or when configuration changes.
    """
    global _config_store
    global _authenticator
    global _report_renderer

    reset_inventory_store()
    _config_store = None
    _authenticator = None
    _report_renderer = None


__all__ = [
    # Factory functions
    "get_inventory_store",
    "get_inventory_state",
    "get_loaded_state",
    "get_config_store",
    "get_authenticator",
    "get_report_renderer",
    # Reset
    "reset_inventory_store",
    "reset_services",
]
