"""Tests for exception to HTTP status mapping."""

import pytest

from stockledger.api.middleware.error_handler import classify
from stockledger.core.exceptions import (
    ConfigurationError,
    GatewayUnavailableError,
    InsufficientStockError,
    ProductNotFoundError,
    ReconciliationError,
    StorageFailureError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("exc", "status_code", "code"),
    [
        (ValidationError("quantity", "must be greater than zero", 0), 400, "VALIDATION_ERROR"),
        (ProductNotFoundError(7), 404, "PRODUCT_NOT_FOUND"),
        (InsufficientStockError(7, 10, 5), 409, "INSUFFICIENT_STOCK"),
        (GatewayUnavailableError("get_product", "request timed out"), 503, "GATEWAY_UNAVAILABLE"),
        (ReconciliationError("mv-1", "rolled_back", "HTTP 500"), 502, "RECONCILIATION_FAILED"),
        (StorageFailureError("append", "disk full"), 500, "STORAGE_FAILURE"),
        (ConfigurationError("bad timezone"), 500, "ConfigurationError"),
        (ValueError("nope"), 400, "BAD_REQUEST"),
        (RuntimeError("boom"), 500, "INTERNAL_ERROR"),
    ],
)
def test_classify(exc, status_code, code):
    assert classify(exc)[:2] == (status_code, code)


def test_ledger_errors_carry_hints():
    _, _, hint = classify(ReconciliationError("mv-1", "flagged", "HTTP 500"))
    assert "unreconciled" in hint
