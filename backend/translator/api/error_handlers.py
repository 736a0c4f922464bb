"""Error Handlers — global exception handlers for the translator API.

Invariants:
    - TranslatorError → its own http_status + to_response() envelope
    - RequestValidationError → 400 with field-level details (camelCase aliases kept)
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - 4xx translator errors logged at WARNING, 5xx at ERROR: a missing entry is
      routine, a failed write is not
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from translator.core.errors import TranslatorError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(TranslatorError, translator_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)


async def translator_error_handler(request: Request, exc: TranslatorError):
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(
        level,
        f"TranslatorError: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "collection": exc.context.collection,
            "entry_id": exc.context.entry_id,
            "operation": exc.context.operation,
        },
    )
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError,
):
    logger.warning(
        f"Validation error on {request.url.path}: {exc.errors()}",
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_build_validation_error_response(exc),
    )


async def generic_error_handler(request: Request, exc: Exception):
    """Catch-all — never leaks internal details."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
