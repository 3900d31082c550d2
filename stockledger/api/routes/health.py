"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from stockledger.api.dependencies import get_services
from stockledger.application.dto.responses import HealthResponse
from stockledger.application.services import LedgerServices
from stockledger.config import get_logger
from stockledger.core.exceptions import StorageError

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    services: LedgerServices = Depends(get_services),
) -> HealthResponse:
    """
    Service status, uptime and database reachability.

    The catalog is not called; its URL is reported for reference.
    """
    database = "ok"
    try:
        await services.store.list_unreconciled()
    except StorageError as e:
        logger.warning("health_database_error", error=str(e))
        database = "error"

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        version=services.settings.app_version,
        uptime_seconds=time.time() - _start_time,
        database=database,
        catalog_url=services.settings.catalog.base_url,
    )
