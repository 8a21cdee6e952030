"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Error bodies are a JSON
string holding the message. By default every gateway error is a 500;
with STRICT_STATUS_CODES input errors become 400, missing objects 404 and
upstream storage failures 502.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gateway.core.config import get_settings
from gateway.domain.exceptions import GatewayException, ValidationException
from gateway.infrastructure.exceptions import (
    StorageConfigurationError,
    StorageException,
    StorageNotFoundError,
)

logger = logging.getLogger(__name__)


def status_for(exc: GatewayException, strict: bool) -> int:
    """Return the HTTP status for a gateway exception."""
    if not strict:
        return 500
    if isinstance(exc, ValidationException):
        return 400
    if isinstance(exc, StorageNotFoundError):
        return 404
    if isinstance(exc, StorageConfigurationError):
        return 500
    if isinstance(exc, StorageException):
        return 502
    return 500


def _gateway_exception_handler(request: Request, exc: GatewayException) -> JSONResponse:
    """Return the exception message as a JSON string."""
    status = status_for(exc, get_settings().strict_status_codes)
    return JSONResponse(status_code=status, content=exc.message)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details (malformed query/path values)."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return the detail of Starlette HTTP exceptions as a JSON string."""
    return JSONResponse(status_code=exc.status_code, content=exc.detail)


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content=detail)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(GatewayException, _gateway_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
