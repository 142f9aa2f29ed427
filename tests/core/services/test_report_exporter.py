"""Tests for CSV and tabular report encoding."""

import csv
import io
from datetime import UTC, date, datetime
from decimal import Decimal

from src.core.entities.inventory import TransactionType
from src.core.services import (
    INVENTORY_EXPORT_COLUMNS,
    TRANSACTION_EXPORT_COLUMNS,
    TRANSACTION_REPORT_COLUMNS,
    Column,
    export_filename,
    format_quantity,
    to_delimited_text,
    to_tabular_report,
)
from tests.factories import make_transaction


class TestFormatQuantity:
    def test_integral(self):
        assert format_quantity(Decimal("10")) == "10"
        assert format_quantity(Decimal("10.00")) == "10"

    def test_fraction_trims_zeros(self):
        assert format_quantity(Decimal("2.50")) == "2.5"

    def test_no_exponent(self):
        assert format_quantity(Decimal("1E+2")) == "100"

    def test_zero(self):
        assert format_quantity(Decimal("0.000")) == "0"


class TestDelimitedText:
    def test_header_row_only_when_empty(self):
        text = to_delimited_text([], TRANSACTION_EXPORT_COLUMNS)
        assert text == "Date,Type,Item Name,Quantity,Unit,Location,Person,Notes"

    def test_transaction_row(self):
        entry = make_transaction(
            "T1", TransactionType.ISSUE, "Tissue Roll", 3,
            datetime(2024, 1, 10, 9, 0, tzinfo=UTC), notes="Lobby restock",
        )
        lines = to_delimited_text([entry], TRANSACTION_EXPORT_COLUMNS).split("\n")
        assert lines[1] == "2024-01-10,Issue,Tissue Roll,3,pcs,Ground Floor,Rahul,Lobby restock"

    def test_quotes_doubled_and_parsed_back(self):
        entry = make_transaction(
            "T1", TransactionType.ISSUE, 'Tissue, "Premium"', 1,
            datetime(2024, 1, 10, tzinfo=UTC), notes="line one\nline two",
        )
        text = to_delimited_text([entry], TRANSACTION_EXPORT_COLUMNS)
        assert '"Tissue, ""Premium"""' in text

        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1][2] == 'Tissue, "Premium"'
        assert rows[1][7] == "line one\nline two"

    def test_numbers_never_quoted(self):
        columns = [Column("N", lambda r: r)]
        assert to_delimited_text([Decimal("1.5"), 2], columns) == "N\n1.5\n2"

    def test_none_is_empty(self):
        entry = make_transaction(
            "T1", TransactionType.ADJUSTMENT, "Sugar", 4,
            datetime(2024, 1, 10, tzinfo=UTC), location=None,
        )
        line = to_delimited_text([entry], TRANSACTION_EXPORT_COLUMNS).split("\n")[1]
        assert line == "2024-01-10,Adjustment,Sugar,4,pcs,,Rahul,"

    def test_alternate_delimiter(self):
        columns = [Column("A", lambda r: r)]
        assert to_delimited_text(["x;y"], columns, delimiter=";") == 'A\n"x;y"'

    def test_deterministic(self, sample_items):
        first = to_delimited_text(sample_items, INVENTORY_EXPORT_COLUMNS)
        assert first == to_delimited_text(sample_items, INVENTORY_EXPORT_COLUMNS)

    def test_inventory_status_column(self, sample_items):
        lines = to_delimited_text(sample_items, INVENTORY_EXPORT_COLUMNS).split("\n")
        assert lines[0] == "ID,Item Name,Category,Quantity,Unit,Min Level,Status"
        assert lines[1] == "ITM-TISSUE-ROLL,Tissue Roll,Housekeeping,10,pcs,2,In Stock"
        assert lines[2].endswith(",Low Stock")


class TestTabularReport:
    def test_reduced_columns_and_unit_suffix(self):
        entry = make_transaction(
            "T1", TransactionType.RECEIVE, "Sugar", "2.5",
            datetime(2024, 1, 10, tzinfo=UTC), location="Vendor",
            person_name="Acme", unit="kg",
        )
        report = to_tabular_report([entry], TRANSACTION_REPORT_COLUMNS, title="Report")
        assert report.headers == ["Date", "Type", "Item", "Quantity", "Location", "Person"]
        assert report.rows == [["2024-01-10", "Receive", "Sugar", "2.5 kg", "Vendor", "Acme"]]

    def test_empty_rows(self):
        report = to_tabular_report([], TRANSACTION_REPORT_COLUMNS, title="Report", subtitle="s")
        assert report.rows == []
        assert report.subtitle == "s"


class TestExportFilename:
    def test_prefix_and_date(self):
        assert export_filename("stock_report", "csv", date(2024, 1, 31)) == (
            "stock_report_2024-01-31.csv"
        )

    def test_extension_dot_stripped(self):
        assert export_filename("x", ".pdf", date(2024, 1, 1)) == "x_2024-01-01.pdf"
