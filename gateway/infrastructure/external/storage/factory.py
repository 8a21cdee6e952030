"""Storage service factory: builds the S3 backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from gateway.infrastructure.exceptions import StorageConfigurationError
from gateway.infrastructure.external.storage.s3_storage import S3StorageService

if TYPE_CHECKING:
    from gateway.core.config import Settings


def normalize_endpoint(s3_url: str, https: bool) -> str:
    """Return scheme://host[:port] for the storage endpoint.

    S3_URL may be "host:port" or a full URL; the scheme always follows
    MANAGE_HTTPS.

    Raises:
        StorageConfigurationError: Empty or malformed endpoint.
    """
    raw = s3_url.strip()
    if not raw:
        raise StorageConfigurationError("S3_URL is not set", "S3_URL")
    parts = urlsplit(raw if "://" in raw else f"//{raw}")
    if parts.scheme not in ("", "http", "https"):
        raise StorageConfigurationError(
            f"unsupported scheme {parts.scheme!r}", "S3_URL"
        )
    if not parts.hostname:
        raise StorageConfigurationError(f"no host in {raw!r}", "S3_URL")
    if parts.username or parts.password:
        raise StorageConfigurationError("credentials in endpoint URL", "S3_URL")
    try:
        parts.port
    except ValueError as e:
        raise StorageConfigurationError(f"invalid port in {raw!r}", "S3_URL") from e
    if parts.path not in ("", "/") or parts.query or parts.fragment:
        raise StorageConfigurationError(
            f"endpoint must not carry a path or query: {raw!r}", "S3_URL"
        )
    scheme = "https" if https else "http"
    return f"{scheme}://{parts.netloc}"


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(settings: "Settings | None" = None) -> S3StorageService:
        """Create storage service from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            S3StorageService bound to the configured bucket.

        Raises:
            StorageConfigurationError: Missing bucket or malformed endpoint.
        """
        from gateway.core.config import get_settings

        s = settings or get_settings()
        endpoint_url = normalize_endpoint(s.s3_url, s.manage_https)
        if not s.bucket_name:
            raise StorageConfigurationError("BUCKET_NAME is not set", "BUCKET_NAME")

        verify: bool | str = True
        if s.manage_https and s.ssl_cert_file:
            verify = s.ssl_cert_file
        return S3StorageService(
            bucket=s.bucket_name,
            endpoint_url=endpoint_url,
            region=s.s3_region,
            access_key=s.api_key or None,
            secret_key=s.secret_key.get_secret_value() or None,
            use_ssl=s.manage_https,
            verify=verify,
            connect_timeout=s.storage_connect_timeout,
            read_timeout=s.storage_read_timeout,
            max_attempts=s.storage_max_attempts,
            default_expiry=s.presigned_url_expiry_seconds,
        )
