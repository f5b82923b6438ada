"""
Uniform JSON error bodies.

Every failure leaves the API as an ``ErrorResponse``::

    {"error_code": "TOTAL_MISMATCH", "message": "...", "hint": "...",
     "detail": "...", "path": "/api/transactions", "timestamp": "..."}

Domain errors carry their own code; the HTTP status comes from
EXCEPTION_STATUS_MAP. Arithmetic oddities in the ledger are never errors,
so nothing here is raised for them.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from billventory.application.dto.responses import ErrorResponse
from billventory.config import get_logger
from billventory.core.exceptions import (
    BillventoryError,
    ConfigurationError,
    StorageError,
    TransactionNotFoundError,
    ValidationError,
)

logger = get_logger(__name__)

# Checked in order; the first isinstance match wins, so subclasses go first
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    TransactionNotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
    KeyError: status.HTTP_404_NOT_FOUND,
}

HINT_MAP: dict[str, str] = {
    "TRANSACTION_NOT_FOUND": "GET /api/transactions lists the ids that exist.",
    "INVALID_TRANSACTION": "Send at least one line item, each with a non-blank description.",
    "TOTAL_MISMATCH": "totalAmount must equal the sum of quantity * price over the items.",
    "LEDGER_UPDATE_FAILED": "Nothing was saved; the submission can be retried as is.",
    "VALIDATION_ERROR": "Compare the request body with the schema at /docs.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "Check the id in the URL.",
    405: "Check the HTTP method for this path.",
    422: "Check field names, types and ranges.",
    500: "Unexpected server error; see the server log.",
}

HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "VALIDATION_ERROR",
}


def _hint(error_code: str, status_code: int) -> str | None:
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code)


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_hint(error_code, status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Map a raised exception to its status code and ErrorResponse body."""
    status_code = _status_for(exc)

    if isinstance(exc, BillventoryError):
        error_code, message = exc.code, exc.message
        detail = str(exc.details) if exc.details else None
    else:
        error_code, message, detail = type(exc).__name__, str(exc), None

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=getattr(request.state, "request_id", None),
        error_code=error_code,
        error=message,
        status=status_code,
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    return _error_json(request, status_code, error_code, message, detail)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last line: turns exceptions no handler claimed into ErrorResponse bodies."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain errors, schema failures and HTTPException."""

    @app.exception_handler(BillventoryError)
    async def domain_error_handler(request: Request, exc: BillventoryError) -> JSONResponse:
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        logger.info("request_rejected", path=request.url.path, problems=len(problems))
        return _error_json(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            "; ".join(problems),
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_json(
            request,
            exc.status_code,
            HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            str(exc.detail) if exc.detail else "An error occurred",
        )
