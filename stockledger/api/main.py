"""
Stock ledger HTTP service.

Run with ``uvicorn stockledger.api.main:app`` or ``python -m stockledger.api.main``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockledger import __version__
from stockledger.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from stockledger.api.middleware.error_handler import setup_exception_handlers
from stockledger.api.routes import (
    alerts_router,
    health_router,
    movements_router,
    reports_router,
    summaries_router,
)
from stockledger.application.services import build_services
from stockledger.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the service graph on startup and close it on shutdown."""
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        services = await build_services(settings)
    except Exception as e:
        logger.error("service_init_failed", error=str(e))
        raise

    app.state.services = services
    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await services.close()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Build the app with middleware, error handlers and all routers."""
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Stock movement ledger, summaries, low-stock alerts and PDF reports",
        version=__version__,
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

    app.include_router(health_router)
    app.include_router(movements_router)
    app.include_router(summaries_router)
    app.include_router(alerts_router)
    app.include_router(reports_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "stockledger.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
