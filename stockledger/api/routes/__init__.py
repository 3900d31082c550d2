"""API route modules."""

from stockledger.api.routes.alerts import router as alerts_router
from stockledger.api.routes.health import router as health_router
from stockledger.api.routes.movements import router as movements_router
from stockledger.api.routes.reports import router as reports_router
from stockledger.api.routes.summaries import router as summaries_router

__all__ = [
    "health_router",
    "movements_router",
    "summaries_router",
    "alerts_router",
    "reports_router",
]
