"""Data transfer objects for the API boundary."""

from stockledger.application.dto.requests import RecordEntryRequest, RecordExitRequest
from stockledger.application.dto.responses import (
    AlertResponse,
    AlertSummaryResponse,
    DailySummaryResponse,
    DayBreakdownResponse,
    DeleteResponse,
    ErrorResponse,
    HealthResponse,
    ImportResultResponse,
    MovementListResponse,
    MovementResponse,
    StockWriteResponse,
    UnreconciledResponse,
    WeeklySummaryResponse,
)

__all__ = [
    # Requests
    "RecordEntryRequest",
    "RecordExitRequest",
    # Responses
    "AlertResponse",
    "AlertSummaryResponse",
    "DailySummaryResponse",
    "DayBreakdownResponse",
    "DeleteResponse",
    "ErrorResponse",
    "HealthResponse",
    "ImportResultResponse",
    "MovementListResponse",
    "MovementResponse",
    "StockWriteResponse",
    "UnreconciledResponse",
    "WeeklySummaryResponse",
]
