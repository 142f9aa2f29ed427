"""Adjust Quantity Use Case: manual stock correction recorded as an Adjustment."""

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from src.application.dto.requests import AdjustQuantityRequest
from src.application.dto.responses import (
    AdjustQuantityResponse,
    ItemResponse,
    TransactionResponse,
)
from src.config import get_logger
from src.core.entities.inventory import (
    Item,
    Transaction,
    TransactionType,
    new_transaction_id,
)
from src.core.exceptions import InvalidQuantityError, RemoteFailureError
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services.inventory_state import InventoryState

logger = get_logger(__name__)


@dataclass
class AdjustQuantityResult:
    """Result of a quantity override."""

    item: Item
    previous_quantity: Decimal
    adjustment: Transaction | None = None  # None when overrides are not recorded


class AdjustQuantityUseCase:
    """Overwrite an item's quantity through the store's override call."""

    def __init__(
        self,
        state: InventoryState | None = None,
        inventory_store: IInventoryStore | None = None,
        record_adjustments: bool = True,
    ):
        self._state = state
        self._inventory_store = inventory_store
        self._record_adjustments = record_adjustments

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from src.application.services import get_inventory_store

            self._inventory_store = get_inventory_store()
        return self._inventory_store

    async def _get_state(self) -> InventoryState:
        if self._state is None:
            from src.application.services import get_inventory_state

            self._state = await get_inventory_state()
        return self._state

    async def execute(self, request: AdjustQuantityRequest) -> AdjustQuantityResult:
        """Execute adjust quantity use case."""
        logger.info(
            "adjust_quantity_started",
            item_name=request.item_name,
            quantity=str(request.quantity),
        )

        if not request.quantity.is_finite() or request.quantity < 0:
            raise InvalidQuantityError(request.quantity)

        state = await self._get_state()
        item = state.catalog.get(request.item_name)
        previous = item.quantity

        person_name = (request.person_name or "").strip()
        notes = (request.notes or "").strip() or None

        store = await self._get_inventory_store()
        result = await store.update_inventory_quantity(
            item.name, request.quantity, person_name=person_name, notes=notes
        )
        if not result.success:
            logger.error(
                "store_quantity_update_failed",
                item_name=item.name,
                raw_cause=result.raw_cause,
            )
            raise RemoteFailureError("quantity update", result.raw_cause)

        updated = state.catalog.set_quantity(item.name, request.quantity)

        adjustment = None
        if result.transaction_id is not None and result.transaction_id in state.ledger:
            # A refresh during the store call already pulled the entry in
            adjustment = state.ledger.lookup(result.transaction_id)
        elif self._record_adjustments:
            adjustment = state.ledger.append(
                Transaction(
                    id=result.transaction_id or new_transaction_id(),
                    type=TransactionType.ADJUSTMENT,
                    item_name=item.name,
                    quantity=request.quantity,
                    unit=item.unit,
                    person_name=person_name,
                    notes=notes,
                    date=result.committed_at or datetime.now(UTC),
                )
            )
        else:
            logger.warning(
                "quantity_override_unrecorded",
                item_name=item.name,
                previous=str(previous),
                quantity=str(request.quantity),
            )

        logger.info(
            "adjust_quantity_complete",
            item_name=item.name,
            previous=str(previous),
            quantity=str(updated.quantity),
        )
        return AdjustQuantityResult(
            item=updated, previous_quantity=previous, adjustment=adjustment
        )

    def to_response(self, result: AdjustQuantityResult) -> AdjustQuantityResponse:
        """Convert result to API response."""
        return AdjustQuantityResponse(
            item=ItemResponse.from_entity(result.item),
            previous_quantity=float(result.previous_quantity),
            adjustment=(
                TransactionResponse.from_entity(result.adjustment)
                if result.adjustment
                else None
            ),
        )
