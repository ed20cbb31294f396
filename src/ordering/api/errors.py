"""Maps domain exceptions to JSON error responses.

Every response has the shape ``{"error": <message>, "details": <data>}``.
Unexpected exceptions become a generic 500 without a stack trace.
"""

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from protean.exceptions import (
    InvalidOperationError,
    ObjectNotFoundError,
    ProteanException,
    ValidationError,
)

from ordering.errors import (
    AlreadyPaidError,
    EmptyCartError,
    InsufficientStockError,
    PaymentFailedError,
)

logger = structlog.get_logger(__name__)

# Checked in order; subclasses before their bases
_ERROR_MAP = [
    (AlreadyPaidError, 400, "Order is already paid"),
    (PaymentFailedError, 400, "Payment processing failed"),
    (EmptyCartError, 400, "Cart is empty"),
    (InsufficientStockError, 400, "Insufficient stock"),
    (ObjectNotFoundError, 404, "Resource not found"),
    (ValidationError, 400, "Validation failed"),
    (InvalidOperationError, 409, "Conflict"),
]


def error_response(exc: ProteanException) -> tuple[int, dict]:
    """Status code and body for a domain exception."""
    for exc_type, status_code, message in _ERROR_MAP:
        if isinstance(exc, exc_type):
            break
    else:
        return 500, {"error": "Internal server error", "details": None}

    messages = getattr(exc, "messages", None)

    if isinstance(exc, PaymentFailedError):
        # Gateway detail stays in the logs and on the payment record
        error = messages if isinstance(messages, str) else message
        return status_code, {"error": error, "details": {"payment_id": exc.payment_id}}

    if isinstance(messages, str):
        return status_code, {"error": messages, "details": None}
    return status_code, {"error": message, "details": messages}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProteanException)
    async def handle_domain_error(request: Request, exc: ProteanException):
        status_code, body = error_response(exc)
        log = logger.error if status_code >= 500 else logger.warning
        log(
            "Request failed",
            path=request.url.path,
            status_code=status_code,
            error_type=type(exc).__name__,
            error=body["error"],
        )
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(HTTPException)
    async def handle_http_error(request: Request, exc: HTTPException):
        logger.warning("Request rejected", path=request.url.path, status_code=exc.status_code, error=exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail, "details": None})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path, error_type=type(exc).__name__)
        return JSONResponse(status_code=500, content={"error": "Internal server error", "details": None})
