"""
Spreadsheet web-endpoint inventory store.

Talks to a script deployment that fronts an "Inventory" and a
"Transactions" sheet. Reads are GET requests selected by an `action`
query parameter; writes are JSON POSTs carrying their own `action`.
A write counts as committed only on HTTP 2xx with `status == "success"`.
"""

from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from src.config import get_logger
from src.core.entities.inventory import (
    Category,
    Item,
    Transaction,
    TransactionDraft,
    TransactionType,
)
from src.core.exceptions import StoreUnavailableError
from src.core.interfaces.inventory_store import IInventoryStore, StoreResult

logger = get_logger(__name__)


def _decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def _optional_text(value: Any) -> str | None:
    text = str(value).strip() if value is not None else ""
    return text or None


def _parse_date(value: Any) -> datetime:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    return datetime.fromisoformat(str(value))


class HttpInventoryStore(IInventoryStore):
    """
    Inventory store reached over HTTP.

    Every call opens a short-lived AsyncClient; the deployment redirects
    once before answering, so redirects are followed.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
        record_adjustments: bool = True,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.record_adjustments = record_adjustments
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        )

    async def _get_rows(self, action: str) -> list[dict]:
        """GET a sheet as a list of row objects."""
        try:
            async with self._client() as client:
                response = await client.get(self.endpoint, params={"action": action})
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("sheet_fetch_failed", action=action, error=str(e))
            raise StoreUnavailableError(action, str(e)) from e

        # Either a bare array or {"status": ..., "data": [...]}
        if isinstance(payload, dict):
            if payload.get("status") == "error":
                raise StoreUnavailableError(action, str(payload.get("message", "error")))
            payload = payload.get("data", [])
        if not isinstance(payload, list):
            raise StoreUnavailableError(action, "Unexpected response shape")
        return payload

    async def _post(self, operation: str, body: dict) -> dict:
        """POST a write and return the decoded body; raise _WriteFailed otherwise."""
        try:
            async with self._client() as client:
                response = await client.post(self.endpoint, json=body)
        except httpx.HTTPError as e:
            logger.error("sheet_write_failed", operation=operation, error=str(e))
            raise _WriteFailed(str(e)) from e

        if not response.is_success:
            raise _WriteFailed(f"HTTP {response.status_code}: {response.text[:200]}")

        try:
            data = response.json()
        except ValueError as e:
            raise _WriteFailed(f"Invalid JSON response: {e}") from e

        if not isinstance(data, dict) or data.get("status") != "success":
            message = data.get("message") if isinstance(data, dict) else None
            raise _WriteFailed(str(message or data))
        return data

    async def fetch_inventory(self) -> list[Item]:
        rows = await self._get_rows("getInventory")
        items = []
        try:
            for index, row in enumerate(rows, start=1):
                items.append(
                    Item(
                        id=str(row.get("id") or f"ROW-{index}"),
                        name=str(row["itemName"]).strip(),
                        category=Category(row.get("category") or Category.HOUSEKEEPING.value),
                        quantity=_decimal(row.get("quantity")),
                        unit=str(row.get("unit") or ""),
                        min_level=_decimal(row.get("minLevel")),
                    )
                )
        except (KeyError, ValueError, InvalidOperation, PydanticValidationError) as e:
            raise StoreUnavailableError("getInventory", f"Malformed item row: {e}") from e

        logger.info("sheet_inventory_fetched", items=len(items))
        return items

    async def fetch_transactions(self) -> list[Transaction]:
        rows = await self._get_rows("getTransactions")
        transactions = []
        try:
            for index, row in enumerate(rows, start=1):
                transactions.append(
                    Transaction(
                        id=str(row.get("id") or f"ROW-{index}"),
                        type=TransactionType(row["type"]),
                        item_name=str(row["itemName"]).strip(),
                        quantity=_decimal(row.get("quantity")),
                        unit=str(row.get("unit") or ""),
                        location=_optional_text(row.get("location")),
                        person_name=str(row.get("personName") or ""),
                        notes=_optional_text(row.get("notes")),
                        date=_parse_date(row["date"]),
                    )
                )
        except (KeyError, ValueError, InvalidOperation, PydanticValidationError) as e:
            raise StoreUnavailableError("getTransactions", f"Malformed transaction row: {e}") from e

        logger.info("sheet_transactions_fetched", transactions=len(transactions))
        return transactions

    async def submit_transaction(self, draft: TransactionDraft) -> StoreResult:
        body = {
            "action": "addTransaction",
            "type": draft.type.value,
            "itemName": draft.item_name,
            "quantity": float(draft.quantity),
            "unit": draft.unit,
            "location": draft.location,
            "personName": draft.person_name,
            "notes": draft.notes or "",
            "date": datetime.now(UTC).isoformat(),
        }
        if draft.category is not None:
            body["category"] = draft.category.value
        if draft.min_level is not None:
            body["minLevel"] = float(draft.min_level)

        try:
            data = await self._post("addTransaction", body)
        except _WriteFailed as e:
            logger.warning("sheet_transaction_rejected", item_name=draft.item_name, cause=e.cause)
            return StoreResult.failed(e.cause)

        return StoreResult(
            success=True,
            transaction_id=_optional_text(data.get("id")),
            committed_at=datetime.now(UTC),
        )

    async def update_inventory_quantity(
        self,
        item_name: str,
        new_quantity: Decimal,
        person_name: str = "",
        notes: str | None = None,
    ) -> StoreResult:
        committed_at = datetime.now(UTC)
        body = {
            "action": "updateQuantity",
            "itemName": item_name,
            "quantity": float(new_quantity),
            "personName": person_name,
            "notes": notes or "",
            "date": committed_at.isoformat(),
            # Ask the endpoint to append the Adjustment row to the Transactions sheet
            "recordAdjustment": self.record_adjustments,
        }
        try:
            data = await self._post("updateQuantity", body)
        except _WriteFailed as e:
            logger.warning("sheet_quantity_rejected", item_name=item_name, cause=e.cause)
            return StoreResult.failed(e.cause)

        transaction_id = _optional_text(data.get("id"))
        if self.record_adjustments and transaction_id is None:
            logger.warning("sheet_adjustment_id_missing", item_name=item_name)
        return StoreResult(
            success=True,
            transaction_id=transaction_id,
            committed_at=committed_at,
        )


class _WriteFailed(Exception):
    def __init__(self, cause: str):
        super().__init__(cause)
        self.cause = cause
