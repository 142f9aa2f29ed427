"""Ledger endpoints: filtered history and Issue/Receive submission."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_app_settings,
    get_state,
    get_store,
    get_submit_transaction_use_case,
    parse_transaction_type,
    refresh_after_mutation,
)
from src.application.dto.requests import SubmitTransactionRequest
from src.application.dto.responses import (
    ErrorResponse,
    SubmitTransactionResponse,
    TransactionListResponse,
    TransactionResponse,
)
from src.application.use_cases import SubmitTransactionUseCase
from src.config import Settings
from src.core.interfaces import IInventoryStore
from src.core.services import InventoryState, filter_transactions

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    transaction_type: str | None = Query(default=None, alias="type"),
    start_date: date | None = None,
    end_date: date | None = None,
    state: InventoryState = Depends(get_state),
) -> TransactionListResponse:
    """Ledger entries matching type and inclusive date range, newest first."""
    rows = filter_transactions(
        state.ledger.list_transactions(),
        transaction_type=parse_transaction_type(transaction_type),
        start_date=start_date,
        end_date=end_date,
    )
    return TransactionListResponse(
        transactions=[TransactionResponse.from_entity(t) for t in rows],
        total=len(rows),
    )


@router.post(
    "",
    response_model=SubmitTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def submit_transaction(
    request: SubmitTransactionRequest,
    use_case: SubmitTransactionUseCase = Depends(get_submit_transaction_use_case),
    state: InventoryState = Depends(get_state),
    store: IInventoryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> SubmitTransactionResponse:
    """Record an Issue or Receive; stock and ledger change together or not at all."""
    result = await use_case.execute(request)
    response = use_case.to_response(result)
    await refresh_after_mutation(state, store, settings)
    return response
