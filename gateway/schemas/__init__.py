"""Pydantic response schemas for the API."""

from gateway.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from gateway.schemas.object import (
    DownloadUrlResponse,
    PresignedUrlResponse,
    ResourceResponse,
    ResourceSchema,
    UploadResponse,
)

__all__ = [
    "DownloadUrlResponse",
    "HealthResponse",
    "PresignedUrlResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "ResourceResponse",
    "ResourceSchema",
    "UploadResponse",
]
