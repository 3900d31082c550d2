"""Low-stock alert entities."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AlertSeverity(str, Enum):
    """Urgency of a low-stock condition, most urgent first."""

    OUT_OF_STOCK = "OUT_OF_STOCK"
    CRITICAL = "CRITICAL"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    AlertSeverity.OUT_OF_STOCK: 0,
    AlertSeverity.CRITICAL: 1,
    AlertSeverity.LOW: 2,
}


class AlertProduct(BaseModel):
    """Product snapshot captured when the alert was computed."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    quantity: int
    stock_alert_threshold: int = Field(..., alias="stockAlertThreshold")


class StockAlert(BaseModel):
    """A severity-tagged low-stock alert. Never stored."""

    product: AlertProduct
    severity: AlertSeverity
    message: str


class AlertCounts(BaseModel):
    """Number of alerts per severity."""

    out_of_stock: int = 0
    critical: int = 0
    low: int = 0

    @property
    def total(self) -> int:
        return self.out_of_stock + self.critical + self.low
