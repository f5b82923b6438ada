"""API route modules."""

from billventory.api.routes.health import router as health_router
from billventory.api.routes.inventory import router as inventory_router
from billventory.api.routes.reports import router as reports_router
from billventory.api.routes.transactions import router as transactions_router

__all__ = [
    "health_router",
    "transactions_router",
    "inventory_router",
    "reports_router",
]
