"""Unit tests for domain exceptions."""

import pytest

from stockledger.core.exceptions import (
    CatalogError,
    GatewayUnavailableError,
    InsufficientStockError,
    ProductNotFoundError,
    ReconciliationError,
    StockLedgerError,
    StorageError,
    StorageFailureError,
    ValidationError,
)


class TestStockLedgerError:
    def test_code_defaults_to_class_name(self):
        error = StockLedgerError("boom")
        assert error.code == "StockLedgerError"
        assert error.details == {}
        assert str(error) == "boom"

    def test_to_dict(self):
        error = StockLedgerError("boom", code="X", details={"a": 1})
        assert error.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}


class TestSpecificErrors:
    def test_validation_error(self):
        error = ValidationError("quantity", "must be greater than zero", 0)
        assert error.code == "VALIDATION_ERROR"
        assert error.details["field"] == "quantity"
        assert error.details["value"] == "0"

    def test_insufficient_stock_message_and_details(self):
        error = InsufficientStockError(product_id=7, requested=100, available=5)
        assert error.message == "Insufficient stock. Available: 5, Requested: 100"
        assert error.details == {"product_id": 7, "requested": 100, "available": 5}
        assert error.code == "INSUFFICIENT_STOCK"

    def test_product_not_found(self):
        error = ProductNotFoundError(42)
        assert error.code == "PRODUCT_NOT_FOUND"
        assert "42" in error.message

    def test_gateway_unavailable_carries_status(self):
        error = GatewayUnavailableError("get_product", "HTTP 500", status_code=500)
        assert error.code == "GATEWAY_UNAVAILABLE"
        assert error.details["status_code"] == 500

    def test_storage_failure(self):
        error = StorageFailureError("append", "disk I/O error")
        assert error.code == "STORAGE_FAILURE"

    def test_reconciliation_error(self):
        error = ReconciliationError("mv-1", "rolled_back", "timed out")
        assert error.code == "RECONCILIATION_FAILED"
        assert error.details == {
            "movement_id": "mv-1",
            "action": "rolled_back",
            "reason": "timed out",
        }

    @pytest.mark.parametrize(
        ("error", "parent"),
        [
            (ProductNotFoundError(1), CatalogError),
            (InsufficientStockError(1, 2, 1), CatalogError),
            (GatewayUnavailableError("op", "down"), CatalogError),
            (StorageFailureError("op", "x"), StorageError),
            (ReconciliationError("id", "flagged", "x"), StockLedgerError),
        ],
    )
    def test_hierarchy(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, StockLedgerError)
