"""Tests for TransactionLedger."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from src.core.entities.inventory import TransactionType
from src.core.exceptions import ValidationError
from src.core.services import TransactionLedger
from tests.factories import make_transaction


def _at(day: int, hour: int = 12) -> datetime:
    return datetime(2024, 3, day, hour, 0, tzinfo=UTC)


class TestAppend:
    def test_append_and_list(self, sample_transactions):
        ledger = TransactionLedger(sample_transactions)
        assert len(ledger) == 3
        assert [t.id for t in ledger.list_transactions()] == ["TXN-1", "TXN-2", "TXN-3"]

    def test_duplicate_id_rejected(self, sample_transactions):
        ledger = TransactionLedger(sample_transactions)
        with pytest.raises(ValidationError):
            ledger.append(sample_transactions[0])
        assert len(ledger) == 3

    def test_list_returns_copy(self, sample_transactions):
        ledger = TransactionLedger(sample_transactions)
        ledger.list_transactions().clear()
        assert len(ledger) == 3

    def test_for_item(self, sample_transactions):
        ledger = TransactionLedger(sample_transactions)
        assert [t.id for t in ledger.for_item("Sugar")] == ["TXN-2"]

    def test_lookup_by_id(self, sample_transactions):
        ledger = TransactionLedger(sample_transactions)
        assert "TXN-2" in ledger
        assert ledger.lookup("TXN-2").item_name == "Sugar"
        assert "TXN-9" not in ledger
        assert ledger.lookup("TXN-9") is None


class TestReplay:
    def test_receive_and_issue(self):
        ledger = TransactionLedger([
            make_transaction("T1", TransactionType.RECEIVE, "Sugar", 10, _at(1)),
            make_transaction("T2", TransactionType.ISSUE, "Sugar", 3, _at(2)),
            make_transaction("T3", TransactionType.ISSUE, "Sugar", 2, _at(3)),
        ])
        assert ledger.replay() == {"Sugar": Decimal("5")}

    def test_adjustment_sets_quantity(self):
        ledger = TransactionLedger([
            make_transaction("T1", TransactionType.RECEIVE, "Sugar", 10, _at(1)),
            make_transaction("T2", TransactionType.ADJUSTMENT, "Sugar", 4, _at(2), location=None),
            make_transaction("T3", TransactionType.ISSUE, "Sugar", 1, _at(3)),
        ])
        assert ledger.replay() == {"Sugar": Decimal("3")}

    def test_replay_uses_date_order_not_append_order(self):
        ledger = TransactionLedger([
            make_transaction("T2", TransactionType.ADJUSTMENT, "Sugar", 4, _at(5), location=None),
            make_transaction("T1", TransactionType.RECEIVE, "Sugar", 10, _at(1)),
        ])
        assert ledger.replay() == {"Sugar": Decimal("4")}

    def test_baseline_kept_for_untouched_items(self):
        ledger = TransactionLedger([
            make_transaction("T1", TransactionType.ISSUE, "Sugar", 2, _at(1)),
        ])
        result = ledger.replay({"Sugar": Decimal("20"), "Salt": Decimal("7")})
        assert result == {"Sugar": Decimal("18"), "Salt": Decimal("7")}
