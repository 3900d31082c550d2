"""
Dependency injection for FastAPI.

The service graph is built once in the application lifespan and stored on
``app.state.services``. Route handlers depend on the narrow getters below,
which tests replace through ``app.dependency_overrides``.
"""

from datetime import datetime

from fastapi import Depends, Query, Request

from stockledger.application.services import LedgerServices
from stockledger.application.use_cases import (
    ExportMovementsUseCase,
    GenerateReportUseCase,
    ImportMovementsUseCase,
    IssueStockUseCase,
    ReceiveStockUseCase,
)
from stockledger.config import Settings
from stockledger.core.entities.movement import MovementFilter, MovementType
from stockledger.core.interfaces import IMovementStore
from stockledger.core.services import AlertClassifier, MovementAggregator
from stockledger.core.services.calendar import ensure_aware


def get_services(request: Request) -> LedgerServices:
    """Services built at startup."""
    return request.app.state.services


def get_app_settings(services: LedgerServices = Depends(get_services)) -> Settings:
    return services.settings


# Stores and core services
def get_movement_store(services: LedgerServices = Depends(get_services)) -> IMovementStore:
    return services.store


def get_aggregator(services: LedgerServices = Depends(get_services)) -> MovementAggregator:
    return services.aggregator


def get_alert_classifier(services: LedgerServices = Depends(get_services)) -> AlertClassifier:
    return services.classifier


# Use case dependencies
def get_receive_stock_use_case(
    services: LedgerServices = Depends(get_services),
) -> ReceiveStockUseCase:
    return services.receive_stock


def get_issue_stock_use_case(
    services: LedgerServices = Depends(get_services),
) -> IssueStockUseCase:
    return services.issue_stock


def get_import_movements_use_case(
    services: LedgerServices = Depends(get_services),
) -> ImportMovementsUseCase:
    return services.import_movements


def get_export_movements_use_case(
    services: LedgerServices = Depends(get_services),
) -> ExportMovementsUseCase:
    return services.export_movements


def get_report_use_case(
    services: LedgerServices = Depends(get_services),
) -> GenerateReportUseCase:
    return services.reports


def get_movement_filter(
    start_date: datetime | None = Query(default=None, description="Inclusive lower bound"),
    end_date: datetime | None = Query(default=None, description="Inclusive upper bound"),
    product_id: int | None = Query(default=None, description="Exact product ID"),
    movement_type: MovementType | None = Query(
        default=None, alias="type", description="ENTREE or SORTIE"
    ),
    user: str | None = Query(default=None, description="Matches user or receiver"),
    search: str | None = Query(
        default=None,
        description="Matches product name, reference, supplier or notes",
    ),
    settings: Settings = Depends(get_app_settings),
) -> MovementFilter:
    """Build a movement filter from query parameters.

    Naive bounds are read in the configured timezone.
    """
    tz = settings.tz
    return MovementFilter(
        start_date=ensure_aware(start_date, tz) if start_date else None,
        end_date=ensure_aware(end_date, tz) if end_date else None,
        product_id=product_id,
        type=movement_type,
        user=user or None,
        search_term=search or None,
    )
