"""Application use cases."""

from stockledger.application.use_cases.generate_report import GenerateReportUseCase, ReportResult
from stockledger.application.use_cases.issue_stock import IssueStockUseCase
from stockledger.application.use_cases.receive_stock import ReceiveStockUseCase
from stockledger.application.use_cases.stock_write import StockWriteResult, StockWriteUseCase
from stockledger.application.use_cases.transfer_movements import (
    ExportMovementsUseCase,
    ImportMovementsUseCase,
    ImportResult,
)

__all__ = [
    "ReceiveStockUseCase",
    "IssueStockUseCase",
    "StockWriteUseCase",
    "StockWriteResult",
    "ExportMovementsUseCase",
    "ImportMovementsUseCase",
    "ImportResult",
    "GenerateReportUseCase",
    "ReportResult",
]
