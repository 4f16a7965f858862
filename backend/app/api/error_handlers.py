"""Error Handlers — map exceptions escaping the routes to JSON error envelopes.

Invariants:
    - DashboardError → its own to_response() envelope and http_status
    - RequestValidationError (bad path/query params) → 400 with per-parameter details
    - Anything else → 500 INTERNAL_ERROR; the exception text is logged, never returned
    - Form validation never reaches here: actions return FormState instead
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import DashboardError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def _envelope(code: str, message: str, category: ErrorCategory, **extra) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": ErrorSeverity.ERROR.value
            if category is ErrorCategory.VALIDATION
            else ErrorSeverity.CRITICAL.value,
            **extra,
        },
    }


async def handle_dashboard_error(request: Request, exc: DashboardError):
    # 4xx are expected outcomes (missing invoice, wrong password)
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "operation": exc.context.operation,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in e["loc"][1:]) or str(e["loc"][0]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected parameters on {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request parameters",
            ErrorCategory.VALIDATION, details=details,
        ),
    )


async def handle_unexpected(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred", ErrorCategory.INTERNAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DashboardError, handle_dashboard_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
