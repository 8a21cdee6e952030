"""Infrastructure exceptions for storage and external operations.

Storage errors extend GatewayException so presentation can map them
to HTTP responses consistently.
"""

from gateway.domain.exceptions import GatewayException


class StorageException(GatewayException):
    """Base exception for storage operations."""


class StorageConfigurationError(StorageException):
    """Storage collaborator could not be built from configuration."""

    def __init__(self, reason: str, setting: str | None = None) -> None:
        details = {"reason": reason}
        if setting:
            details["setting"] = setting
        super().__init__(
            f"Invalid storage configuration: {reason}",
            "STORAGE_CONFIGURATION_ERROR",
            details,
        )


class StorageNotFoundError(StorageException):
    """Object not found in storage."""

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Object not found: {key}",
            "STORAGE_NOT_FOUND",
            {"key": key},
        )


class StorageSignError(StorageException):
    """Presigned URL could not be generated."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to sign URL for object: {key}: {reason}",
            "STORAGE_SIGN_ERROR",
            {"key": key, "reason": reason},
        )


class StorageListError(StorageException):
    """Object listing failed."""

    def __init__(self, prefix: str, reason: str) -> None:
        super().__init__(
            f"Failed to list objects under: {prefix}: {reason}",
            "STORAGE_LIST_ERROR",
            {"prefix": prefix, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Object deletion failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete object: {key}: {reason}",
            "STORAGE_DELETE_ERROR",
            {"key": key, "reason": reason},
        )


class StorageUploadError(StorageException):
    """Relayed upload failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload object: {key}: {reason}",
            "STORAGE_UPLOAD_ERROR",
            {"key": key, "reason": reason},
        )
