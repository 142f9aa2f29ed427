"""
Read-side projections over the catalog and the ledger.

Pure functions: inputs are never mutated and identical inputs always
produce identical output order, which keeps exports reproducible.
"""

import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from enum import Enum

from src.core.entities.inventory import Category, Item, Transaction, TransactionType

# Filter value meaning "no constraint"
ALL = "All"


class SortOrder(str, Enum):
    """Catalog sort orders."""

    NONE = "none"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"


def _collation_key(name: str) -> tuple[str, str]:
    """Accent- and case-insensitive primary key, lowercase-first secondary key."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name.swapcase()


def _is_unfiltered(value: object) -> bool:
    return value is None or value == "" or value == ALL


def _enum_value(value: object) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def filter_items(
    items: Sequence[Item],
    category: Category | str | None = None,
    search_text: str | None = None,
    sort: SortOrder | str = SortOrder.NONE,
) -> list[Item]:
    """
    Filter and sort catalog items.

    Args:
        items: Catalog items in store order.
        category: Exact category, or None/"All" for every category.
        search_text: Case-insensitive substring matched against name or id.
        sort: name-asc, name-desc, or none to keep input order.

    Returns:
        Matching items. Sorting is stable, so equal keys keep input order.
    """
    wanted_category = None if _is_unfiltered(category) else _enum_value(category)
    needle = (search_text or "").casefold()

    result = [
        item
        for item in items
        if (wanted_category is None or item.category.value == wanted_category)
        and (
            not needle
            or needle in item.name.casefold()
            or needle in item.id.casefold()
        )
    ]

    order = SortOrder(sort)
    if order == SortOrder.NAME_ASC:
        result.sort(key=lambda item: _collation_key(item.name))
    elif order == SortOrder.NAME_DESC:
        result.sort(key=lambda item: _collation_key(item.name), reverse=True)
    return result


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def filter_transactions(
    transactions: Sequence[Transaction],
    transaction_type: TransactionType | str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[Transaction]:
    """
    Filter ledger entries by type and date range, newest first.

    The end date is inclusive of its whole calendar day: an entry matches
    when start_date <= date < end_date + 1 day (UTC day boundaries).
    """
    wanted_type = (
        None if _is_unfiltered(transaction_type) else _enum_value(transaction_type)
    )
    lower = _day_start(start_date) if start_date else None
    upper = _day_start(end_date + timedelta(days=1)) if end_date else None

    result = [
        t
        for t in transactions
        if (wanted_type is None or t.type.value == wanted_type)
        and (lower is None or t.date >= lower)
        and (upper is None or t.date < upper)
    ]
    result.sort(key=lambda t: t.date, reverse=True)
    return result


def low_stock_items(items: Sequence[Item]) -> list[Item]:
    """Items at or below their minimum level, in catalog order."""
    return [item for item in items if item.is_low_stock]


@dataclass
class InventorySummary:
    """Dashboard figures for the current snapshot."""

    total_items: int
    low_stock_count: int
    category_counts: dict[str, int] = field(default_factory=dict)
    recent_issues: list[Transaction] = field(default_factory=list)
    low_stock_items: list[Item] = field(default_factory=list)


def summarize_inventory(
    items: Sequence[Item],
    transactions: Sequence[Transaction],
    recent_limit: int = 5,
    low_stock_limit: int = 6,
) -> InventorySummary:
    """Compute dashboard figures."""
    low = low_stock_items(items)

    category_counts = {category.value: 0 for category in Category}
    for item in items:
        category_counts[item.category.value] += 1

    issues = filter_transactions(transactions, transaction_type=TransactionType.ISSUE)

    return InventorySummary(
        total_items=len(items),
        low_stock_count=len(low),
        category_counts=category_counts,
        recent_issues=issues[:recent_limit],
        low_stock_items=low[:low_stock_limit],
    )
