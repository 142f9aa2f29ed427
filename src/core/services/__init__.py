"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.inventory_state import InventoryState
from src.core.services.item_catalog import ItemCatalog
from src.core.services.report_exporter import (
    INVENTORY_EXPORT_COLUMNS,
    TRANSACTION_EXPORT_COLUMNS,
    TRANSACTION_REPORT_COLUMNS,
    Column,
    IReportPdfRenderer,
    TabularReport,
    export_filename,
    format_quantity,
    to_delimited_text,
    to_tabular_report,
)
from src.core.services.stock_query import (
    ALL,
    InventorySummary,
    SortOrder,
    filter_items,
    filter_transactions,
    low_stock_items,
    summarize_inventory,
)
from src.core.services.transaction_ledger import TransactionLedger

__all__ = [
    # Catalog and ledger
    "ItemCatalog",
    "TransactionLedger",
    "InventoryState",
    # Queries
    "ALL",
    "SortOrder",
    "InventorySummary",
    "filter_items",
    "filter_transactions",
    "low_stock_items",
    "summarize_inventory",
    # Export
    "Column",
    "TabularReport",
    "IReportPdfRenderer",
    "INVENTORY_EXPORT_COLUMNS",
    "TRANSACTION_EXPORT_COLUMNS",
    "TRANSACTION_REPORT_COLUMNS",
    "export_filename",
    "format_quantity",
    "to_delimited_text",
    "to_tabular_report",
]
