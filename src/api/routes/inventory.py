"""Catalog endpoints: listing, dashboard summary and quantity overrides."""

from fastapi import APIRouter, Depends

from src.api.dependencies import (
    get_adjust_quantity_use_case,
    get_app_settings,
    get_state,
    get_store,
    parse_category,
    parse_sort,
    refresh_after_mutation,
)
from src.application.dto.requests import AdjustQuantityRequest, UpdateQuantityRequest
from src.application.dto.responses import (
    AdjustQuantityResponse,
    ErrorResponse,
    InventoryListResponse,
    InventorySummaryResponse,
    ItemResponse,
    RefreshResponse,
    TransactionResponse,
)
from src.application.use_cases import AdjustQuantityUseCase
from src.config import Settings
from src.core.interfaces import IInventoryStore
from src.core.services import (
    InventoryState,
    filter_items,
    low_stock_items,
    summarize_inventory,
)

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    category: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    state: InventoryState = Depends(get_state),
) -> InventoryListResponse:
    """List catalog items, optionally filtered by category and name/id text."""
    items = filter_items(
        state.catalog.list_items(),
        category=parse_category(category),
        search_text=search,
        sort=parse_sort(sort),
    )
    return InventoryListResponse(
        items=[ItemResponse.from_entity(item) for item in items],
        total=len(items),
    )


@router.get("/low-stock", response_model=InventoryListResponse)
async def list_low_stock(
    state: InventoryState = Depends(get_state),
) -> InventoryListResponse:
    """Items at or below their minimum level, in catalog order."""
    items = low_stock_items(state.catalog.list_items())
    return InventoryListResponse(
        items=[ItemResponse.from_entity(item) for item in items],
        total=len(items),
    )


@router.get("/summary", response_model=InventorySummaryResponse)
async def inventory_summary(
    state: InventoryState = Depends(get_state),
    settings: Settings = Depends(get_app_settings),
) -> InventorySummaryResponse:
    """Dashboard figures: totals, category split, recent issues, low stock."""
    summary = summarize_inventory(
        state.catalog.list_items(),
        state.ledger.list_transactions(),
        recent_limit=settings.inventory.recent_issue_limit,
        low_stock_limit=settings.inventory.low_stock_alert_limit,
    )
    return InventorySummaryResponse(
        total_items=summary.total_items,
        low_stock_count=summary.low_stock_count,
        category_counts=summary.category_counts,
        recent_issues=[TransactionResponse.from_entity(t) for t in summary.recent_issues],
        low_stock_items=[ItemResponse.from_entity(i) for i in summary.low_stock_items],
    )


@router.put(
    "/{item_name}/quantity",
    response_model=AdjustQuantityResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def update_quantity(
    item_name: str,
    request: UpdateQuantityRequest,
    use_case: AdjustQuantityUseCase = Depends(get_adjust_quantity_use_case),
    state: InventoryState = Depends(get_state),
    store: IInventoryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AdjustQuantityResponse:
    """Overwrite an item's on-hand quantity (manual correction)."""
    result = await use_case.execute(
        AdjustQuantityRequest(
            item_name=item_name,
            quantity=request.quantity,
            person_name=request.person_name,
            notes=request.notes,
        )
    )
    response = use_case.to_response(result)
    await refresh_after_mutation(state, store, settings)
    return response


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    responses={503: {"model": ErrorResponse}},
)
async def refresh_inventory(
    state: InventoryState = Depends(get_state),
    store: IInventoryStore = Depends(get_store),
) -> RefreshResponse:
    """Re-read catalog and ledger from the store."""
    await state.refresh(store)
    return RefreshResponse(
        items=len(state.catalog),
        transactions=len(state.ledger),
        loaded_at=state.loaded_at,
    )
