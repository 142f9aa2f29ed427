"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from src.api.dependencies import get_app_settings
from src.application.dto.responses import HealthResponse
from src.application.services import get_loaded_state
from src.config import Settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Basic health check.

    Reports uptime and, once the session state is loaded, how many items
    it holds. Never calls the store.
    """
    state = get_loaded_state()
    return HealthResponse(
        status="healthy" if state is not None else "starting",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        store_backend=settings.store.backend,
        items_loaded=len(state.catalog) if state is not None else None,
    )
