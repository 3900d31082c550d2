"""
Domain exceptions for the stock ledger.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class StockLedgerError(Exception):
    """Base exception for all stock ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(StockLedgerError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Catalog Exceptions
class CatalogError(StockLedgerError):
    """Base exception for product catalog problems."""

    pass


class ProductNotFoundError(CatalogError):
    """Referenced product does not exist in the catalog."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class InsufficientStockError(CatalogError):
    """Exit quantity exceeds what the catalog has on hand."""

    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(
            f"Insufficient stock. Available: {available}, Requested: {requested}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
            },
        )


class GatewayUnavailableError(CatalogError):
    """Catalog service unreachable or answered unexpectedly."""

    def __init__(self, operation: str, reason: str, status_code: int | None = None):
        super().__init__(
            f"Catalog unavailable during {operation}: {reason}",
            code="GATEWAY_UNAVAILABLE",
            details={
                "operation": operation,
                "reason": reason,
                "status_code": status_code,
            },
        )


# Storage Exceptions
class StorageError(StockLedgerError):
    """Base exception for storage operations."""

    pass


class StorageFailureError(StorageError):
    """The movement store could not read or write."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Storage failure during {operation}: {error}",
            code="STORAGE_FAILURE",
            details={"operation": operation, "error": error},
        )


# Ledger Exceptions
class ReconciliationError(StockLedgerError):
    """Ledger append succeeded but the catalog quantity update did not."""

    def __init__(self, movement_id: str, action: str, reason: str):
        super().__init__(
            f"Catalog update failed for movement {movement_id} ({action}): {reason}",
            code="RECONCILIATION_FAILED",
            details={
                "movement_id": movement_id,
                "action": action,
                "reason": reason,
            },
        )


class ConfigurationError(StockLedgerError):
    """Configuration error."""

    pass
