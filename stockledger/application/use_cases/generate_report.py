"""
Generate Report Use Case.

Loads the data for each stock report and hands it to the PDF renderer.
"""

from dataclasses import dataclass
from datetime import date, tzinfo

from stockledger.config import get_logger
from stockledger.core.entities.movement import MovementFilter
from stockledger.core.interfaces.catalog_gateway import ICatalogGateway
from stockledger.core.interfaces.movement_store import IMovementStore
from stockledger.core.services.aggregator import MovementAggregator
from stockledger.core.services.alert_classifier import DEFAULT_THRESHOLD, AlertClassifier
from stockledger.core.services.calendar import now
from stockledger.core.services.movement_filter import filter_movements
from stockledger.infrastructure.pdf import IReportRenderer

logger = get_logger(__name__)


@dataclass
class ReportResult:
    """Rendered PDF and its download name."""

    pdf_bytes: bytes
    filename: str

    @property
    def file_size(self) -> int:
        return len(self.pdf_bytes)


class GenerateReportUseCase:
    """
    Use case for stock PDF reports.

    Flow:
    1. Load movements, summaries, alerts or products
    2. Render via the report renderer
    3. Return PDF bytes with a dated file name
    """

    def __init__(
        self,
        store: IMovementStore,
        gateway: ICatalogGateway,
        aggregator: MovementAggregator,
        classifier: AlertClassifier,
        renderer: IReportRenderer,
        tz: tzinfo | None = None,
        default_threshold: int = DEFAULT_THRESHOLD,
    ):
        self._store = store
        self._gateway = gateway
        self._aggregator = aggregator
        self._classifier = classifier
        self._renderer = renderer
        self._tz = tz
        self._default_threshold = default_threshold

    def _today(self) -> date:
        return now(self._tz).date()

    async def daily_entries(self, day: date | None = None) -> ReportResult:
        summary = await self._aggregator.daily_summary(day or self._today())
        return self._done(
            self._renderer.render_daily_entries(summary),
            f"daily_entry_report_{summary.date.isoformat()}.pdf",
        )

    async def daily_exits(self, day: date | None = None) -> ReportResult:
        summary = await self._aggregator.daily_summary(day or self._today())
        return self._done(
            self._renderer.render_daily_exits(summary),
            f"daily_exit_report_{summary.date.isoformat()}.pdf",
        )

    async def weekly(self, day: date | None = None) -> ReportResult:
        summary = await self._aggregator.weekly_summary(day or self._today())
        return self._done(
            self._renderer.render_weekly(summary),
            f"weekly_stock_report_{summary.week_start.isoformat()}.pdf",
        )

    async def history(self, criteria: MovementFilter | None = None) -> ReportResult:
        movements = filter_movements(await self._store.all(), criteria)
        label = criteria.describe() if criteria else ""
        return self._done(
            self._renderer.render_history(movements, label),
            f"movement_history_{now(self._tz):%Y%m%d_%H%M%S}.pdf",
        )

    async def low_stock(self) -> ReportResult:
        alerts = await self._classifier.compute_alerts()
        return self._done(
            self._renderer.render_low_stock(alerts),
            f"low_stock_report_{self._today():%Y%m%d}.pdf",
        )

    async def inventory(self) -> ReportResult:
        products = await self._gateway.list_products()
        return self._done(
            self._renderer.render_inventory(products, self._default_threshold),
            f"inventory_report_{self._today():%Y%m%d}.pdf",
        )

    @staticmethod
    def _done(pdf_bytes: bytes, filename: str) -> ReportResult:
        result = ReportResult(pdf_bytes=pdf_bytes, filename=filename)
        logger.info("report_generated", filename=filename, file_size=result.file_size)
        return result
