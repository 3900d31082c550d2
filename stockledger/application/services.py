"""
Service wiring for the application.

``build_services`` constructs every collaborator exactly once (pool, store,
gateway, core services, renderer and use cases) from a ``Settings`` object.
The API lifespan owns the resulting ``LedgerServices`` and closes it on
shutdown. Nothing here is a module-level singleton.
"""

from dataclasses import dataclass

from stockledger.application.use_cases import (
    ExportMovementsUseCase,
    GenerateReportUseCase,
    ImportMovementsUseCase,
    IssueStockUseCase,
    ReceiveStockUseCase,
)
from stockledger.config import Settings, get_logger
from stockledger.core.interfaces import ICatalogGateway, IMovementStore
from stockledger.core.services import AlertClassifier, MovementAggregator, MovementRecorder
from stockledger.infrastructure.catalog import HttpCatalogGateway
from stockledger.infrastructure.pdf import Fpdf2ReportRenderer, IReportRenderer
from stockledger.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteMovementStore,
    run_migrations,
)

logger = get_logger(__name__)


@dataclass
class LedgerServices:
    """Everything a request handler may need, built once per process."""

    settings: Settings
    store: IMovementStore
    gateway: ICatalogGateway
    recorder: MovementRecorder
    aggregator: MovementAggregator
    classifier: AlertClassifier
    renderer: IReportRenderer
    receive_stock: ReceiveStockUseCase
    issue_stock: IssueStockUseCase
    import_movements: ImportMovementsUseCase
    export_movements: ExportMovementsUseCase
    reports: GenerateReportUseCase
    pool: ConnectionPool | None = None

    async def close(self) -> None:
        """Release the HTTP client and database connections."""
        if isinstance(self.gateway, HttpCatalogGateway):
            await self.gateway.aclose()
        if self.pool is not None:
            await self.pool.close()
        logger.info("services_closed")


def wire_services(
    settings: Settings,
    store: IMovementStore,
    gateway: ICatalogGateway,
    renderer: IReportRenderer | None = None,
    pool: ConnectionPool | None = None,
) -> LedgerServices:
    """Assemble core services and use cases around a store and a gateway."""
    tz = settings.tz
    recorder = MovementRecorder(store, gateway, tz)
    aggregator = MovementAggregator(store, tz)
    classifier = AlertClassifier(
        gateway,
        default_threshold=settings.alerts.default_threshold,
        critical_percent=settings.alerts.critical_percent,
    )
    renderer = renderer or Fpdf2ReportRenderer(settings.pdf, tz)
    policy = settings.ledger.reconciliation_policy

    return LedgerServices(
        settings=settings,
        store=store,
        gateway=gateway,
        recorder=recorder,
        aggregator=aggregator,
        classifier=classifier,
        renderer=renderer,
        receive_stock=ReceiveStockUseCase(recorder, store, gateway, policy),
        issue_stock=IssueStockUseCase(recorder, store, gateway, policy),
        import_movements=ImportMovementsUseCase(store, tz),
        export_movements=ExportMovementsUseCase(store),
        reports=GenerateReportUseCase(
            store,
            gateway,
            aggregator,
            classifier,
            renderer,
            tz=tz,
            default_threshold=settings.alerts.default_threshold,
        ),
        pool=pool,
    )


async def build_services(settings: Settings) -> LedgerServices:
    """Migrate the database, open the pool and wire the production stack."""
    db_path = settings.storage.db_path
    await run_migrations(db_path)

    pool = ConnectionPool.from_settings(settings.storage)
    await pool.initialize()

    services = wire_services(
        settings,
        store=SQLiteMovementStore(pool),
        gateway=HttpCatalogGateway.from_settings(settings.catalog),
        pool=pool,
    )
    logger.info(
        "services_ready",
        db_path=str(db_path),
        catalog_url=settings.catalog.base_url,
        reconciliation_policy=settings.ledger.reconciliation_policy,
    )
    return services
