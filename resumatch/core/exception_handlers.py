"""Global exception handlers for the HTTP surface.

Analysis failures are part of the returned view, so these handlers only see
errors raised outside a controller cycle (e.g. a misconfigured match service
client) and anything unexpected.

- ValidationAppError -> 400
- ServiceAppError -> 502 (upstream answered with an error)
- TransportAppError -> 504 (upstream unreachable or too slow)
- Exception -> 500 with a generic message
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from resumatch.core.errors import AppError, ServiceAppError, TransportAppError
from resumatch.core.logging import get_request_id

logger = logging.getLogger(__name__)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, ServiceAppError):
        return 502
    if isinstance(exc, TransportAppError):
        return 504
    return 400


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError as ``{"error": {code, message, request_id[, details]}}``."""
    status_code = _status_for(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
        },
    )

    error_content = {
        "code": exc.code,
        "message": exc.message,
        "request_id": get_request_id(),
    }
    if exc.details:
        error_content["details"] = exc.details

    return JSONResponse(status_code=status_code, content={"error": error_content})


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Safety net: log the failure, return a generic 500 without internals."""
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": get_request_id(),
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the handlers on ``app``; safe to call more than once."""
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
