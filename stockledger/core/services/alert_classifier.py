"""
Alert Classifier.

Turns live catalog quantities into severity-tagged low-stock alerts.
Nothing is cached; every call re-reads the catalog.

Severity bands for a threshold T (inclusive upper bounds):

    quantity <= 0                  OUT_OF_STOCK
    0 < quantity <= 30% of T       CRITICAL
    30% of T < quantity <= T       LOW
    quantity > T                   no alert

The critical boundary is compared as ``quantity * 100 <= T * percent`` so
exact multiples (T=10, quantity=3) land in CRITICAL without float rounding.
"""

from collections.abc import Iterable

from stockledger.config import get_logger
from stockledger.core.entities.alert import (
    AlertCounts,
    AlertProduct,
    AlertSeverity,
    StockAlert,
)
from stockledger.core.entities.product import Product
from stockledger.core.interfaces.catalog_gateway import ICatalogGateway

logger = get_logger(__name__)

DEFAULT_THRESHOLD = 10
CRITICAL_PERCENT = 30


def classify_severity(
    quantity: int,
    threshold: int,
    critical_percent: int = CRITICAL_PERCENT,
) -> AlertSeverity | None:
    """Severity for ``quantity`` against ``threshold``; None when stock is fine."""
    if quantity <= 0:
        return AlertSeverity.OUT_OF_STOCK
    if quantity * 100 <= threshold * critical_percent:
        return AlertSeverity.CRITICAL
    if quantity <= threshold:
        return AlertSeverity.LOW
    return None


def _message(name: str, quantity: int, severity: AlertSeverity) -> str:
    if severity == AlertSeverity.OUT_OF_STOCK:
        return f"{name} is out of stock"
    if severity == AlertSeverity.CRITICAL:
        return f"{name} is critically low ({quantity} units remaining)"
    return f"{name} is approaching low stock ({quantity} units remaining)"


def classify_product(
    product: Product,
    default_threshold: int = DEFAULT_THRESHOLD,
    critical_percent: int = CRITICAL_PERCENT,
) -> StockAlert | None:
    """Alert for one product, or None when it is above its threshold."""
    threshold = product.effective_threshold(default_threshold)
    severity = classify_severity(product.quantity, threshold, critical_percent)
    if severity is None:
        return None

    return StockAlert(
        product=AlertProduct(
            id=product.id,
            name=product.name,
            quantity=product.quantity,
            stock_alert_threshold=threshold,
        ),
        severity=severity,
        message=_message(product.name, product.quantity, severity),
    )


def build_alerts(
    products: Iterable[Product],
    default_threshold: int = DEFAULT_THRESHOLD,
    critical_percent: int = CRITICAL_PERCENT,
) -> list[StockAlert]:
    """Alerts for every product needing attention, most urgent first."""
    alerts = [
        alert
        for alert in (
            classify_product(p, default_threshold, critical_percent) for p in products
        )
        if alert is not None
    ]
    # sorted() is stable, so catalog order survives within a severity
    return sorted(alerts, key=lambda a: a.severity.rank)


def summarize_alerts(alerts: Iterable[StockAlert]) -> AlertCounts:
    """Count alerts per severity."""
    counts = AlertCounts()
    for alert in alerts:
        if alert.severity == AlertSeverity.OUT_OF_STOCK:
            counts.out_of_stock += 1
        elif alert.severity == AlertSeverity.CRITICAL:
            counts.critical += 1
        else:
            counts.low += 1
    return counts


class AlertClassifier:
    """Computes low-stock alerts from the live catalog."""

    def __init__(
        self,
        gateway: ICatalogGateway,
        default_threshold: int = DEFAULT_THRESHOLD,
        critical_percent: int = CRITICAL_PERCENT,
    ) -> None:
        self._gateway = gateway
        self._default_threshold = default_threshold
        self._critical_percent = critical_percent

    async def compute_alerts(self) -> list[StockAlert]:
        """Fetch all products and classify them."""
        products = await self._gateway.list_products()
        alerts = build_alerts(products, self._default_threshold, self._critical_percent)

        logger.info(
            "stock_alerts_computed",
            products=len(products),
            alerts=len(alerts),
        )
        return alerts
