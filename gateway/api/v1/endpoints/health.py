"""Health check endpoints for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from gateway.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Storage backend not configured", "model": ReadinessErrorResponse}},
)
def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 once the storage collaborator exists; 503 with the startup error otherwise."""
    storage = getattr(request.app.state, "storage", None)
    if storage is not None:
        return ReadinessResponse(bucket=storage.bucket)
    error = getattr(request.app.state, "storage_error", None)
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            message=error.message if error is not None else "Storage backend not initialised",
        ).model_dump(),
    )
