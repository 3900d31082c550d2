"""Low-stock alert endpoints."""

from fastapi import APIRouter, Depends

from stockledger.api.dependencies import get_alert_classifier
from stockledger.application.dto.responses import (
    AlertResponse,
    AlertSummaryResponse,
    ErrorResponse,
)
from stockledger.core.services import AlertClassifier, summarize_alerts

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get(
    "",
    response_model=list[AlertResponse],
    responses={503: {"model": ErrorResponse}},
)
async def list_alerts(
    classifier: AlertClassifier = Depends(get_alert_classifier),
) -> list[AlertResponse]:
    """Products at or below their threshold, most urgent first."""
    alerts = await classifier.compute_alerts()
    return [AlertResponse.from_entity(alert) for alert in alerts]


@router.get(
    "/summary",
    response_model=AlertSummaryResponse,
    responses={503: {"model": ErrorResponse}},
)
async def alert_summary(
    classifier: AlertClassifier = Depends(get_alert_classifier),
) -> AlertSummaryResponse:
    """Alert counts per severity, for badge polling."""
    alerts = await classifier.compute_alerts()
    return AlertSummaryResponse.from_counts(summarize_alerts(alerts))
