"""
Stockroom API application.

Builds the FastAPI app, wires middleware and routers, and prepares the
configured inventory store during startup.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    auth_router,
    health_router,
    inventory_router,
    reports_router,
    settings_router,
    transactions_router,
)
from src.config import configure_logging, get_logger, get_settings
from src.core.exceptions import StockroomError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Prepares the configured store and loads the session state on startup;
    closes the SQLite pool on shutdown.
    """
    settings = get_settings()
    backend = settings.store.backend

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        backend=backend,
    )

    if backend == "sqlite":
        from src.infrastructure.storage.sqlite import get_pool, run_migrations

        results = await run_migrations()
        if any(not r.success for r in results):
            raise RuntimeError("Database migrations failed")
        await get_pool()
        logger.info("database_initialized", migrations_applied=len(results))

    # A store that cannot be read yet (e.g. no endpoint configured) must not
    # block startup; the state loads on the first request instead.
    try:
        from src.application.services import get_inventory_state

        state = await get_inventory_state()
        logger.info(
            "inventory_state_ready",
            items=len(state.catalog),
            transactions=len(state.ledger),
        )
    except StockroomError as e:
        logger.warning("inventory_state_deferred", error_code=e.code, error=e.message)

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    if backend == "sqlite":
        from src.infrastructure.storage.sqlite import close_pool

        await close_pool()

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Build the app with logging, middleware, CORS and every router."""
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Stockroom Inventory API",
        description="Housekeeping and pantry stock: issue, receive, adjust and report",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(inventory_router)
    app.include_router(transactions_router)
    app.include_router(reports_router)
    app.include_router(settings_router)

    return app


# Create app instance
app = create_app()


# Liveness probe that never touches the store
@app.get("/health")
async def root_health() -> dict[str, str]:
    """Process is up."""
    return {
        "status": "healthy",
        "version": get_settings().app_version,
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
