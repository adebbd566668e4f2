"""Error Handlers — global exception handlers for the JSON:API service.

Invariants:
    - JsonApiError → JSON:API `errors` document with code, detail, severity
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (JsonApiError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py (ADR: import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from jsonapi_compound.core.errors import JsonApiError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_jsonapi_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_jsonapi_error_handler(app: FastAPI) -> None:
    """Register compound-document error handler."""

    @app.exception_handler(JsonApiError)
    async def jsonapi_error_handler(request: Request, exc: JsonApiError):
        """Handle all domain errors raised while building documents."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"JsonApiError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "relationship": exc.context.relationship,
                "include_prefix": exc.context.include_prefix,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "errors": [{
                    "status": "500",
                    "code": "INTERNAL_ERROR",
                    "title": "internal",
                    "detail": "An unexpected error occurred",
                    "meta": {"severity": ErrorSeverity.CRITICAL.value},
                }],
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """One JSON:API error object per invalid field."""
    return {
        "errors": [
            {
                "status": "400",
                "code": "VALIDATION_ERROR",
                "title": "validation",
                "detail": e["msg"],
                "source": {"parameter": ".".join(str(loc) for loc in e["loc"])},
                "meta": {"severity": ErrorSeverity.ERROR.value, "type": e["type"]},
            }
            for e in exc.errors()
        ],
    }
