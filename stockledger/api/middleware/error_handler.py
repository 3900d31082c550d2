"""
Error responses for the ledger API.

Every failure leaves the service as an ``ErrorResponse`` body carrying a
stable ``error_code``, the message, a recovery hint and the request path.
Ledger errors are mapped by their code; anything else becomes a 500,
except a bare ``ValueError`` which is treated as bad input.
"""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from stockledger.application.dto.responses import ErrorResponse
from stockledger.config import get_logger
from stockledger.core.exceptions import StockLedgerError

logger = get_logger(__name__)


# error code -> (HTTP status, hint)
ERROR_TABLE: dict[str, tuple[int, str]] = {
    "VALIDATION_ERROR": (
        status.HTTP_400_BAD_REQUEST,
        "Fix the highlighted field and resend the request.",
    ),
    "PRODUCT_NOT_FOUND": (
        status.HTTP_404_NOT_FOUND,
        "Check the product ID against the catalog service.",
    ),
    "INSUFFICIENT_STOCK": (
        status.HTTP_409_CONFLICT,
        "Reduce the exit quantity or record an entry first.",
    ),
    "GATEWAY_UNAVAILABLE": (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "The catalog service is unreachable. Retry later.",
    ),
    "RECONCILIATION_FAILED": (
        status.HTTP_502_BAD_GATEWAY,
        "The catalog quantity was not updated. "
        "See GET /api/movements/unreconciled for flagged movements.",
    ),
    "STORAGE_FAILURE": (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "The movement database could not be read or written. Check server logs.",
    ),
}

FALLBACK_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "No such route or resource.",
    405: "This route does not accept that HTTP method.",
    422: "Check the request body fields and types.",
    500: "Unexpected server error. Check server logs.",
}

_HTTP_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def _error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    hint: str | None = None,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=hint or FALLBACK_HINTS.get(status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _format_details(details: dict) -> str | None:
    pairs = [f"{key}={value}" for key, value in details.items() if value is not None]
    return "; ".join(pairs) or None


def classify(exc: Exception) -> tuple[int, str, str | None]:
    """HTTP status, error code and hint for an exception."""
    if isinstance(exc, StockLedgerError):
        status_code, hint = ERROR_TABLE.get(
            exc.code, (status.HTTP_500_INTERNAL_SERVER_ERROR, None)
        )
        return status_code, exc.code, hint
    if isinstance(exc, ValueError):
        return status.HTTP_400_BAD_REQUEST, "BAD_REQUEST", None
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", None


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns exceptions escaping a route into ``ErrorResponse`` bodies."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc)

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        status_code, error_code, hint = classify(exc)

        if isinstance(exc, StockLedgerError):
            message, detail = exc.message, _format_details(exc.details)
        else:
            message, detail = str(exc) or exc.__class__.__name__, None

        log_fields = {
            "request_id": getattr(request.state, "request_id", None),
            "method": request.method,
            "path": request.url.path,
            "error_code": error_code,
            "error": message,
        }
        if status_code >= 500 and not isinstance(exc, StockLedgerError):
            # Unexpected: keep the traceback
            logger.exception("request_error", **log_fields)
        elif status_code >= 500:
            logger.error("request_error", **log_fields)
        else:
            logger.warning("request_error", **log_fields)

        return _error_response(request, status_code, error_code, message, hint, detail)


def setup_exception_handlers(app: FastAPI) -> None:
    """Route FastAPI's own errors through the same response format."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return _error_response(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            detail="; ".join(problems),
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(
            request,
            exc.status_code,
            _HTTP_CODES.get(exc.status_code, "HTTP_ERROR"),
            str(exc.detail) if exc.detail else "An error occurred",
        )
