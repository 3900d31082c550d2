"""Core domain entities."""

from stockledger.core.entities.alert import (
    AlertCounts,
    AlertProduct,
    AlertSeverity,
    StockAlert,
)
from stockledger.core.entities.movement import (
    Movement,
    MovementDraft,
    MovementFilter,
    MovementType,
    UnreconciledMovement,
)
from stockledger.core.entities.product import Product, TypeProduct
from stockledger.core.entities.summary import DailySummary, DayBreakdown, WeeklySummary

__all__ = [
    # Movements
    "Movement",
    "MovementDraft",
    "MovementFilter",
    "MovementType",
    "UnreconciledMovement",
    # Catalog
    "Product",
    "TypeProduct",
    # Aggregates
    "DailySummary",
    "DayBreakdown",
    "WeeklySummary",
    # Alerts
    "AlertCounts",
    "AlertProduct",
    "AlertSeverity",
    "StockAlert",
]
