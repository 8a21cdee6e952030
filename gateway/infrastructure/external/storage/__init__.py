"""Storage: S3-compatible backend (AWS S3, MinIO).

StorageFactory builds the backend once from app settings. The backend
implements IObjectStorage (sign, list, delete).
"""

from gateway.infrastructure.external.storage.factory import (
    StorageFactory,
    normalize_endpoint,
)
from gateway.infrastructure.external.storage.s3_storage import S3StorageService

__all__ = [
    "S3StorageService",
    "StorageFactory",
    "normalize_endpoint",
]
