"""
Export encoders for catalog and ledger projections.

Produces delimited text (CSV) and a compact tabular report for printing.
Output is fully determined by the rows and the column list, so the same
projection always encodes to the same bytes.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from src.core.entities.inventory import Item, Transaction


@dataclass(frozen=True)
class Column:
    """One exported column: header text and how to read the cell from a row."""

    header: str
    value: Callable[[Any], Any]


@dataclass
class TabularReport:
    """A print-ready table."""

    title: str
    subtitle: str
    headers: list[str]
    rows: list[list[str]] = field(default_factory=list)


class IReportPdfRenderer(ABC):
    """Interface for rendering a tabular report to PDF."""

    @abstractmethod
    def render(self, report: TabularReport) -> bytes:
        """Render the report into PDF bytes."""
        pass


def format_quantity(value: Decimal) -> str:
    """Plain decimal text without exponent or trailing zeros (2.50 -> 2.5)."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


def _is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return format_quantity(value)
    if isinstance(value, date):
        return value.isoformat()
    return str(getattr(value, "value", value))


def _encode_field(value: Any, delimiter: str) -> str:
    if _is_numeric(value):
        return _cell_text(value)
    text = _cell_text(value)
    if '"' in text or delimiter in text or "\n" in text or "\r" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def to_delimited_text(
    rows: Sequence[Any],
    columns: Sequence[Column],
    delimiter: str = ",",
    line_terminator: str = "\n",
) -> str:
    """
    Encode rows as delimited text with a header line.

    String fields are quoted, with embedded quotes doubled, only when they
    contain a quote, the delimiter or a line break. Numbers are never quoted.
    """
    lines = [delimiter.join(_encode_field(col.header, delimiter) for col in columns)]
    for row in rows:
        lines.append(
            delimiter.join(_encode_field(col.value(row), delimiter) for col in columns)
        )
    return line_terminator.join(lines)


def to_tabular_report(
    rows: Sequence[Any],
    columns: Sequence[Column],
    title: str,
    subtitle: str = "",
) -> TabularReport:
    """Project rows onto a reduced column set as display strings."""
    return TabularReport(
        title=title,
        subtitle=subtitle,
        headers=[col.header for col in columns],
        rows=[[_cell_text(col.value(row)) for col in columns] for row in rows],
    )


def export_filename(prefix: str, extension: str, today: date | None = None) -> str:
    """Build '<prefix>_YYYY-MM-DD.<extension>'."""
    day = today or date.today()
    return f"{prefix}_{day.isoformat()}.{extension.lstrip('.')}"


def _stock_status(item: Item) -> str:
    return "Low Stock" if item.is_low_stock else "In Stock"


def _quantity_with_unit(t: Transaction) -> str:
    return f"{format_quantity(t.quantity)} {t.unit or ''}".strip()


TRANSACTION_EXPORT_COLUMNS: list[Column] = [
    Column("Date", lambda t: t.date.date()),
    Column("Type", lambda t: t.type),
    Column("Item Name", lambda t: t.item_name),
    Column("Quantity", lambda t: t.quantity),
    Column("Unit", lambda t: t.unit or ""),
    Column("Location", lambda t: t.location or ""),
    Column("Person", lambda t: t.person_name),
    Column("Notes", lambda t: t.notes),
]

TRANSACTION_REPORT_COLUMNS: list[Column] = [
    Column("Date", lambda t: t.date.date()),
    Column("Type", lambda t: t.type),
    Column("Item", lambda t: t.item_name),
    Column("Quantity", _quantity_with_unit),
    Column("Location", lambda t: t.location or ""),
    Column("Person", lambda t: t.person_name),
]

INVENTORY_EXPORT_COLUMNS: list[Column] = [
    Column("ID", lambda i: i.id),
    Column("Item Name", lambda i: i.name),
    Column("Category", lambda i: i.category),
    Column("Quantity", lambda i: i.quantity),
    Column("Unit", lambda i: i.unit),
    Column("Min Level", lambda i: i.min_level),
    Column("Status", _stock_status),
]
