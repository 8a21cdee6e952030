"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when the storage backend is configured."""

    status: str = Field(default="ok", description="Readiness status")
    bucket: str = Field(..., description="Bucket the gateway signs for")


class ReadinessErrorResponse(BaseModel):
    """Response for GET /health/ready when storage could not be built (503)."""

    status: str = Field(default="not_ready", description="Readiness status")
    message: str = Field(..., description="Reason (e.g. malformed S3_URL)")
