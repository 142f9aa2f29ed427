"""Tests for HttpInventoryStore against a mocked spreadsheet endpoint."""

import json
from datetime import UTC, datetime
from decimal import Decimal

import httpx
import pytest

from src.application.dto.requests import AdjustQuantityRequest
from src.application.use_cases.adjust_quantity import AdjustQuantityUseCase
from src.core.entities.inventory import Category, TransactionDraft, TransactionType
from src.core.exceptions import StoreUnavailableError
from src.core.services import InventoryState
from src.infrastructure.remote import HttpInventoryStore

ENDPOINT = "https://script.example.com/macros/s/abc/exec"

INVENTORY_ROWS = [
    {
        "id": "ITM-001", "itemName": "Tissue Roll", "category": "Housekeeping",
        "quantity": 10, "unit": "pcs", "minLevel": 2,
    },
    {"itemName": " Olive Oil ", "category": "Pantry", "quantity": 6.5, "unit": "ltr"},
]

TRANSACTION_ROWS = [
    {
        "id": "TXN-1", "type": "Receive", "itemName": "Tissue Roll", "quantity": 10,
        "unit": "pcs", "location": "Vendor", "personName": "Acme",
        "notes": "", "date": "2024-01-10T09:00:00Z",
    },
    {
        "type": "Issue", "itemName": "Tissue Roll", "quantity": 2, "unit": "pcs",
        "location": "Ground Floor", "personName": "Rahul", "date": 1704967200000,
    },
]


def _store(handler) -> HttpInventoryStore:
    return HttpInventoryStore(ENDPOINT, timeout=5.0, transport=httpx.MockTransport(handler))


def _draft(**extra) -> TransactionDraft:
    fields = {
        "type": TransactionType.ISSUE,
        "item_name": "Tissue Roll",
        "quantity": Decimal("3"),
        "unit": "pcs",
        "location": "Ground Floor",
        "person_name": "Rahul",
    }
    fields.update(extra)
    return TransactionDraft(**fields)


class TestFetch:
    async def test_fetch_inventory(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.params["action"] == "getInventory"
            return httpx.Response(200, json=INVENTORY_ROWS)

        items = await _store(handler).fetch_inventory()

        assert [i.name for i in items] == ["Tissue Roll", "Olive Oil"]
        assert items[0].min_level == Decimal("2")
        assert items[1].id == "ROW-2"
        assert items[1].quantity == Decimal("6.5")
        assert items[1].category == Category.PANTRY

    async def test_fetch_transactions_dates(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["action"] == "getTransactions"
            return httpx.Response(200, json={"status": "success", "data": TRANSACTION_ROWS})

        entries = await _store(handler).fetch_transactions()

        assert entries[0].date == datetime(2024, 1, 10, 9, 0, tzinfo=UTC)
        assert entries[0].notes is None
        assert entries[1].id == "ROW-2"
        assert entries[1].date == datetime(2024, 1, 11, 10, 0, tzinfo=UTC)

    async def test_follows_redirect(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "script.example.com":
                return httpx.Response(
                    302, headers={"Location": "https://content.example.com/echo?x=1"}
                )
            return httpx.Response(200, json=INVENTORY_ROWS)

        assert len(await _store(handler).fetch_inventory()) == 2

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, text="boom"),
            httpx.Response(200, text="<html>not json</html>"),
            httpx.Response(200, json={"status": "error", "message": "Sheet missing"}),
            httpx.Response(200, json={"unexpected": True, "data": "x"}),
            httpx.Response(200, json=[{"quantity": 1}]),
        ],
    )
    async def test_unreadable_responses(self, response):
        with pytest.raises(StoreUnavailableError):
            await _store(lambda request: response).fetch_inventory()

    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(StoreUnavailableError):
            await _store(handler).fetch_transactions()


class TestWrites:
    async def test_submit_posts_camel_case_body(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"status": "success", "id": "TXN-99"})

        result = await _store(handler).submit_transaction(_draft(notes="Lobby"))

        assert result.success
        assert result.transaction_id == "TXN-99"
        assert seen["action"] == "addTransaction"
        assert seen["itemName"] == "Tissue Roll"
        assert seen["personName"] == "Rahul"
        assert seen["quantity"] == 3.0
        assert seen["notes"] == "Lobby"
        assert "category" not in seen

    async def test_submit_new_item_fields(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"status": "success"})

        await _store(handler).submit_transaction(
            _draft(
                type=TransactionType.RECEIVE, item_name="Rice", location="Vendor",
                category=Category.PANTRY, min_level=Decimal("5"),
            )
        )
        assert seen["category"] == "Pantry"
        assert seen["minLevel"] == 5.0

    @pytest.mark.parametrize(
        ("response", "cause"),
        [
            (httpx.Response(200, json={"status": "error", "message": "Locked"}), "Locked"),
            (httpx.Response(503, text="down"), "HTTP 503"),
            (httpx.Response(200, text="ok"), "Invalid JSON"),
        ],
    )
    async def test_submit_failures(self, response, cause):
        result = await _store(lambda request: response).submit_transaction(_draft())
        assert not result.success
        assert cause in result.raw_cause

    async def test_submit_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        result = await _store(handler).submit_transaction(_draft())
        assert not result.success

    async def test_update_quantity_sends_audit_fields(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"status": "success", "id": "TXN-ADJ"})

        result = await _store(handler).update_inventory_quantity(
            "Tissue Roll", Decimal("4"), person_name="Asha", notes="Stock take"
        )

        assert result.success
        assert result.transaction_id == "TXN-ADJ"
        assert seen["action"] == "updateQuantity"
        assert seen["itemName"] == "Tissue Roll"
        assert seen["quantity"] == 4.0
        assert seen["personName"] == "Asha"
        assert seen["notes"] == "Stock take"
        assert seen["recordAdjustment"] is True
        assert "date" in seen

    async def test_update_quantity_unrecorded(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"status": "success"})

        store = HttpInventoryStore(
            ENDPOINT, transport=httpx.MockTransport(handler), record_adjustments=False
        )
        result = await store.update_inventory_quantity("Tissue Roll", Decimal("4"))

        assert result.success
        assert result.transaction_id is None
        assert seen["recordAdjustment"] is False


class FakeSheet:
    """In-memory stand-in for the script deployment's two sheets."""

    def __init__(self):
        self.inventory = [dict(row) for row in INVENTORY_ROWS[:1]]
        self.transactions: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            action = request.url.params["action"]
            rows = self.inventory if action == "getInventory" else self.transactions
            return httpx.Response(200, json=rows)

        body = json.loads(request.content)
        row = next(r for r in self.inventory if r["itemName"] == body["itemName"])
        row["quantity"] = body["quantity"]
        if not body.get("recordAdjustment"):
            return httpx.Response(200, json={"status": "success"})

        entry_id = f"TXN-{len(self.transactions) + 1}"
        self.transactions.append(
            {
                "id": entry_id, "type": "Adjustment", "itemName": body["itemName"],
                "quantity": body["quantity"], "unit": row["unit"],
                "personName": body["personName"], "notes": body["notes"],
                "date": body["date"],
            }
        )
        return httpx.Response(200, json={"status": "success", "id": entry_id})


async def test_override_survives_refresh():
    sheet = FakeSheet()
    store = HttpInventoryStore(ENDPOINT, transport=httpx.MockTransport(sheet))
    state = await InventoryState.load(store)

    result = await AdjustQuantityUseCase(state=state, inventory_store=store).execute(
        AdjustQuantityRequest(item_name="Tissue Roll", quantity=Decimal("4"), person_name="Asha")
    )
    assert result.adjustment.id == "TXN-1"
    assert len(state.ledger) == 1

    await state.refresh(store)

    entries = state.ledger.list_transactions()
    assert [(e.id, e.type, e.person_name) for e in entries] == [
        ("TXN-1", TransactionType.ADJUSTMENT, "Asha")
    ]
    assert state.catalog.get("Tissue Roll").quantity == Decimal("4")
    assert state.ledger.replay()["Tissue Roll"] == Decimal("4")
