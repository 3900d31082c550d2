"""PDF report downloads."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from stockledger.api.dependencies import get_movement_filter, get_report_use_case
from stockledger.application.use_cases import GenerateReportUseCase, ReportResult
from stockledger.core.entities.movement import MovementFilter

router = APIRouter(prefix="/api/reports", tags=["reports"])

_DAY_QUERY = Query(default=None, description="Calendar day (defaults to today)")


def _pdf(result: ReportResult) -> Response:
    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.get("/daily-entries", response_class=Response)
async def daily_entries_report(
    day: date | None = _DAY_QUERY,
    use_case: GenerateReportUseCase = Depends(get_report_use_case),
) -> Response:
    return _pdf(await use_case.daily_entries(day))


@router.get("/daily-exits", response_class=Response)
async def daily_exits_report(
    day: date | None = _DAY_QUERY,
    use_case: GenerateReportUseCase = Depends(get_report_use_case),
) -> Response:
    return _pdf(await use_case.daily_exits(day))


@router.get("/weekly", response_class=Response)
async def weekly_report(
    day: date | None = _DAY_QUERY,
    use_case: GenerateReportUseCase = Depends(get_report_use_case),
) -> Response:
    return _pdf(await use_case.weekly(day))


@router.get("/history", response_class=Response)
async def history_report(
    criteria: MovementFilter = Depends(get_movement_filter),
    use_case: GenerateReportUseCase = Depends(get_report_use_case),
) -> Response:
    """Movement history using the same filters as GET /api/movements."""
    return _pdf(await use_case.history(criteria))


@router.get("/low-stock", response_class=Response)
async def low_stock_report(
    use_case: GenerateReportUseCase = Depends(get_report_use_case),
) -> Response:
    return _pdf(await use_case.low_stock())


@router.get("/inventory", response_class=Response)
async def inventory_report(
    use_case: GenerateReportUseCase = Depends(get_report_use_case),
) -> Response:
    return _pdf(await use_case.inventory())
