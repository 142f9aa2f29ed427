"""Submit Transaction Use Case: validated Issue/Receive with atomic store commit."""

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from src.application.dto.requests import SubmitTransactionRequest
from src.application.dto.responses import (
    ItemResponse,
    SubmitTransactionResponse,
    TransactionResponse,
)
from src.config import get_logger
from src.core.entities.inventory import (
    Category,
    Item,
    Transaction,
    TransactionDraft,
    TransactionType,
    allowed_locations,
    new_item_id,
    new_transaction_id,
)
from src.core.exceptions import (
    InsufficientStockError,
    InvalidLocationError,
    InvalidQuantityError,
    RemoteFailureError,
    ValidationError,
    WouldGoNegativeError,
)
from src.core.interfaces.inventory_store import IInventoryStore, StoreResult
from src.core.services.inventory_state import InventoryState

logger = get_logger(__name__)


@dataclass
class SubmitTransactionResult:
    """Result of a committed movement."""

    transaction: Transaction
    item: Item
    created: bool = False  # True if the receipt onboarded a new item
    stale: bool = False  # True if the local view could not absorb the change


def _required(value: str, field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(field=field, message="This field is required")
    return text


class SubmitTransactionUseCase:
    """
    Validate and commit an Issue or Receive.

    Validation runs entirely against the local catalog and blocks any store
    call on failure. The store commits ledger and catalog together or not at
    all; only after it reports success is the local view updated.
    """

    def __init__(
        self,
        state: InventoryState | None = None,
        inventory_store: IInventoryStore | None = None,
        default_category: Category = Category.HOUSEKEEPING,
    ):
        self._state = state
        self._inventory_store = inventory_store
        self._default_category = default_category

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

    def _build_draft(
        self, request: SubmitTransactionRequest, state: InventoryState
    ) -> TransactionDraft:
        """Run every local check and return the store payload."""
        if request.type == TransactionType.ADJUSTMENT:
            raise ValidationError(
                field="type",
                message="Adjustments are recorded through the quantity override",
                value=request.type.value,
            )

        item_name = _required(request.item_name, "item_name")
        if not request.quantity.is_finite() or request.quantity <= 0:
            raise InvalidQuantityError(request.quantity, "must be greater than zero")

        location = _required(request.location, "location")
        allowed = allowed_locations(request.type)
        if location not in allowed:
            raise InvalidLocationError(location, allowed)

        person_name = _required(request.person_name, "person_name")
        existing = state.catalog.lookup(item_name)

        if request.type == TransactionType.ISSUE:
            item = state.catalog.get(item_name)
            if request.quantity > item.quantity:
                raise InsufficientStockError(
                    item_name=item_name,
                    requested=request.quantity,
                    available=item.quantity,
                    unit=item.unit,
                )

        # The unit follows the catalog when the caller leaves it blank
        unit = (request.unit or "").strip() or (existing.unit if existing else "")
        unit = _required(unit, "unit")

        return TransactionDraft(
            type=request.type,
            item_name=item_name,
            quantity=request.quantity,
            unit=unit,
            location=location,
            person_name=person_name,
            notes=(request.notes or "").strip() or None,
            category=request.category if existing is None else None,
            min_level=request.min_level if existing is None else None,
        )

    def _build_transaction(
        self, draft: TransactionDraft, result: StoreResult
    ) -> Transaction:
        return Transaction(
            id=result.transaction_id or new_transaction_id(),
            type=draft.type,
            item_name=draft.item_name,
            quantity=draft.quantity,
            unit=draft.unit,
            location=draft.location,
            person_name=draft.person_name,
            notes=draft.notes,
            date=result.committed_at or datetime.now(UTC),
        )

    def _absorbed_by_refresh(
        self,
        state: InventoryState,
        draft: TransactionDraft,
        result: StoreResult,
        existed: bool,
    ) -> SubmitTransactionResult:
        """The snapshot was replaced while the store call was in flight.

        The committed movement is left to the refreshed view (or the next
        refresh); nothing is applied on top of it.
        """
        logger.warning(
            "submit_view_replaced",
            item_name=draft.item_name,
            transaction_id=result.transaction_id,
        )
        transaction = None
        if result.transaction_id:
            transaction = state.ledger.lookup(result.transaction_id)
        if transaction is None:
            transaction = self._build_transaction(draft, result)

        item = state.catalog.lookup(draft.item_name)
        if item is None:
            # Only a first Receive can commit an item the snapshot lacks
            item = Item(
                id=result.item_id or new_item_id(),
                name=draft.item_name,
                category=draft.category or self._default_category,
                quantity=draft.quantity,
                unit=draft.unit,
                min_level=draft.min_level or Decimal("0"),
            )

        return SubmitTransactionResult(
            transaction=transaction, item=item, created=not existed, stale=True
        )

    def _apply_locally(
        self,
        state: InventoryState,
        draft: TransactionDraft,
        result: StoreResult,
    ) -> SubmitTransactionResult:
        created = False
        stale = False

        if draft.item_name not in state.catalog:
            state.catalog.add_item(
                Item(
                    id=result.item_id or new_item_id(),
                    name=draft.item_name,
                    category=draft.category or self._default_category,
                    quantity=Decimal("0"),
                    unit=draft.unit,
                    min_level=draft.min_level or Decimal("0"),
                )
            )
            created = True

        delta = draft.quantity if draft.type == TransactionType.RECEIVE else -draft.quantity
        try:
            item = state.catalog.apply_delta(draft.item_name, delta)
        except WouldGoNegativeError:
            # A refresh raced this submit; the store already committed.
            logger.warning(
                "catalog_view_stale",
                item_name=draft.item_name,
                delta=str(delta),
            )
            item = state.catalog.get(draft.item_name)
            stale = True

        transaction = state.ledger.append(self._build_transaction(draft, result))

        return SubmitTransactionResult(
            transaction=transaction, item=item, created=created, stale=stale
        )

    async def execute(self, request: SubmitTransactionRequest) -> SubmitTransactionResult:
        """Execute submit transaction use case."""
        logger.info(
            "submit_transaction_started",
            type=request.type.value,
            item_name=request.item_name,
            quantity=str(request.quantity),
        )

        state = await self._get_state()
        store = await self._get_inventory_store()

        async with state.submission():
            try:
                draft = self._build_draft(request, state)
            except ValidationError as e:
                logger.info("submit_transaction_rejected", code=e.code, reason=e.message)
                raise

            catalog, ledger = state.catalog, state.ledger
            existed = draft.item_name in catalog
            result = await store.submit_transaction(draft)
            if not result.success:
                logger.error(
                    "store_submit_failed",
                    type=draft.type.value,
                    item_name=draft.item_name,
                    raw_cause=result.raw_cause,
                )
                raise RemoteFailureError("transaction", result.raw_cause)

            replaced = state.catalog is not catalog or state.ledger is not ledger
            if replaced or (
                result.transaction_id is not None and result.transaction_id in state.ledger
            ):
                outcome = self._absorbed_by_refresh(state, draft, result, existed)
            else:
                outcome = self._apply_locally(state, draft, result)

        logger.info(
            "submit_transaction_complete",
            transaction_id=outcome.transaction.id,
            item_name=outcome.item.name,
            quantity=str(outcome.item.quantity),
            low_stock=outcome.item.is_low_stock,
        )
        return outcome

    def to_response(self, result: SubmitTransactionResult) -> SubmitTransactionResponse:
        """Convert result to API response."""
        return SubmitTransactionResponse(
            transaction=TransactionResponse.from_entity(result.transaction),
            item=ItemResponse.from_entity(result.item),
            created=result.created,
            stale=result.stale,
        )
