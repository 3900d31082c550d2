"""Response bodies of the ledger API.

Movements are returned with snake_case field names; the camelCase ledger
layout is only used by the export endpoint.
"""

import datetime

from pydantic import BaseModel, Field

from stockledger.core.entities.alert import AlertCounts, StockAlert
from stockledger.core.entities.movement import Movement, UnreconciledMovement
from stockledger.core.entities.summary import DailySummary, WeeklySummary


# --- Movements ---


class MovementResponse(BaseModel):
    """A recorded stock movement."""

    id: str
    product_id: int
    product_name: str
    type: str = Field(..., description="ENTREE or SORTIE")
    quantity: int
    date: datetime.datetime
    reference: str | None = None
    supplier: str | None = None
    reason: str | None = None
    receiver: str | None = None
    user: str | None = None
    purpose: str | None = None
    notes: str | None = None
    created_by: str | None = None

    @classmethod
    def from_entity(cls, movement: Movement) -> "MovementResponse":
        return cls(
            id=movement.id,
            product_id=movement.product_id,
            product_name=movement.product_name,
            type=movement.type.value,
            quantity=movement.quantity,
            date=movement.date,
            reference=movement.reference,
            supplier=movement.supplier,
            reason=movement.reason,
            receiver=movement.receiver,
            user=movement.user,
            purpose=movement.purpose,
            notes=movement.notes,
            created_by=movement.created_by,
        )


class MovementListResponse(BaseModel):
    """Filtered movements, newest first."""

    items: list[MovementResponse]
    total: int


class StockWriteResponse(BaseModel):
    """Result of an entry or exit that reached both ledger and catalog."""

    movement: MovementResponse
    previous_quantity: int = Field(..., description="Catalog quantity before the write")
    new_quantity: int = Field(..., description="Catalog quantity after the write")


class DeleteResponse(BaseModel):
    """Outcome of a delete-by-id."""

    id: str
    deleted: bool


class ImportResultResponse(BaseModel):
    """Counts from a ledger import."""

    imported: int
    skipped: int


class UnreconciledResponse(BaseModel):
    """A movement awaiting manual catalog reconciliation."""

    movement_id: str
    reason: str
    flagged_at: datetime.datetime

    @classmethod
    def from_entity(cls, item: UnreconciledMovement) -> "UnreconciledResponse":
        return cls(
            movement_id=item.movement_id,
            reason=item.reason,
            flagged_at=item.flagged_at,
        )


# --- Summaries ---


class DayBreakdownResponse(BaseModel):
    """One day in a weekly summary."""

    date: datetime.date
    entries_count: int
    exits_count: int
    entries_quantity: int
    exits_quantity: int
    net_change: int


class DailySummaryResponse(BaseModel):
    """Entries and exits on one calendar day."""

    date: datetime.date
    entries: list[MovementResponse]
    exits: list[MovementResponse]
    total_entries_quantity: int
    total_exits_quantity: int
    net_change: int

    @classmethod
    def from_entity(cls, summary: DailySummary) -> "DailySummaryResponse":
        return cls(
            date=summary.date,
            entries=[MovementResponse.from_entity(m) for m in summary.entries],
            exits=[MovementResponse.from_entity(m) for m in summary.exits],
            total_entries_quantity=summary.total_entries_quantity,
            total_exits_quantity=summary.total_exits_quantity,
            net_change=summary.net_change,
        )


class WeeklySummaryResponse(BaseModel):
    """Monday-to-Sunday summary with a 7-day breakdown."""

    week_start: datetime.date
    week_end: datetime.date
    entries: list[MovementResponse]
    exits: list[MovementResponse]
    total_entries_quantity: int
    total_exits_quantity: int
    net_change: int
    daily_breakdown: list[DayBreakdownResponse]

    @classmethod
    def from_entity(cls, summary: WeeklySummary) -> "WeeklySummaryResponse":
        return cls(
            week_start=summary.week_start,
            week_end=summary.week_end,
            entries=[MovementResponse.from_entity(m) for m in summary.entries],
            exits=[MovementResponse.from_entity(m) for m in summary.exits],
            total_entries_quantity=summary.total_entries_quantity,
            total_exits_quantity=summary.total_exits_quantity,
            net_change=summary.net_change,
            daily_breakdown=[
                DayBreakdownResponse(
                    date=day.date,
                    entries_count=day.entries_count,
                    exits_count=day.exits_count,
                    entries_quantity=day.entries_quantity,
                    exits_quantity=day.exits_quantity,
                    net_change=day.net_change,
                )
                for day in summary.daily_breakdown
            ],
        )


# --- Alerts ---


class AlertResponse(BaseModel):
    """A low-stock alert for one product."""

    product_id: int
    product_name: str
    quantity: int
    stock_alert_threshold: int = Field(..., description="Effective threshold used")
    severity: str
    message: str

    @classmethod
    def from_entity(cls, alert: StockAlert) -> "AlertResponse":
        return cls(
            product_id=alert.product.id,
            product_name=alert.product.name,
            quantity=alert.product.quantity,
            stock_alert_threshold=alert.product.stock_alert_threshold,
            severity=alert.severity.value,
            message=alert.message,
        )


class AlertSummaryResponse(BaseModel):
    """Alert counts per severity."""

    out_of_stock: int
    critical: int
    low: int
    total: int

    @classmethod
    def from_counts(cls, counts: AlertCounts) -> "AlertSummaryResponse":
        return cls(
            out_of_stock=counts.out_of_stock,
            critical=counts.critical,
            low=counts.low,
            total=counts.total,
        )


# --- Health / errors ---


class HealthResponse(BaseModel):
    """Service status. The catalog is not probed."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: str = Field(..., description="ok or error")
    catalog_url: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime.datetime = Field(default_factory=datetime.datetime.now)
