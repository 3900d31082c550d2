"""Daily and weekly movement summaries."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from stockledger.api.dependencies import get_aggregator, get_app_settings
from stockledger.application.dto.responses import DailySummaryResponse, WeeklySummaryResponse
from stockledger.config import Settings
from stockledger.core.services import MovementAggregator
from stockledger.core.services.calendar import now

router = APIRouter(prefix="/api/summaries", tags=["summaries"])


@router.get("/daily", response_model=DailySummaryResponse)
async def daily_summary(
    day: date | None = Query(default=None, description="Calendar day (defaults to today)"),
    aggregator: MovementAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_app_settings),
) -> DailySummaryResponse:
    summary = await aggregator.daily_summary(day or now(settings.tz).date())
    return DailySummaryResponse.from_entity(summary)


@router.get("/weekly", response_model=WeeklySummaryResponse)
async def weekly_summary(
    day: date | None = Query(
        default=None,
        description="Any day in the wanted Monday-to-Sunday week (defaults to today)",
    ),
    aggregator: MovementAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_app_settings),
) -> WeeklySummaryResponse:
    summary = await aggregator.weekly_summary(day or now(settings.tz).date())
    return WeeklySummaryResponse.from_entity(summary)
