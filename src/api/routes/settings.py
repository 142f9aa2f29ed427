"""Store endpoint configuration."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_app_settings, get_store_config
from src.application.dto.requests import StoreConfigRequest
from src.application.dto.responses import ErrorResponse, StoreConfigResponse
from src.application.services import reset_inventory_store
from src.config import Settings, get_logger
from src.core.interfaces import IConfigStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/store", response_model=StoreConfigResponse)
async def get_store_settings(
    config_store: IConfigStore = Depends(get_store_config),
    settings: Settings = Depends(get_app_settings),
) -> StoreConfigResponse:
    """Current endpoint and backend."""
    return StoreConfigResponse(
        endpoint=config_store.get_stored_config(),
        backend=settings.store.backend,
    )


@router.put(
    "/store",
    response_model=StoreConfigResponse,
    responses={400: {"model": ErrorResponse}},
)
async def save_store_settings(
    request: StoreConfigRequest,
    config_store: IConfigStore = Depends(get_store_config),
    settings: Settings = Depends(get_app_settings),
) -> StoreConfigResponse:
    """Save the endpoint. The http backend reconnects on the next request."""
    config_store.save_config(request.endpoint)
    if settings.store.backend == "http":
        reset_inventory_store()
        logger.info("inventory_store_reset", reason="endpoint_changed")
    return StoreConfigResponse(
        endpoint=config_store.get_stored_config(),
        backend=settings.store.backend,
    )
