"""API route modules."""

from src.api.routes.auth import router as auth_router
from src.api.routes.health import router as health_router
from src.api.routes.inventory import router as inventory_router
from src.api.routes.reports import router as reports_router
from src.api.routes.settings import router as settings_router
from src.api.routes.transactions import router as transactions_router

__all__ = [
    "health_router",
    "auth_router",
    "inventory_router",
    "transactions_router",
    "reports_router",
    "settings_router",
]
