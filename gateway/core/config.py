"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Environment names follow the deployed gateway
(S3_URL, BUCKET_NAME, API_KEY, SECRET_KEY, MANAGE_HTTPS, SSL_CERT_FILE,
HOST, ALLOWED_ORIGIN). Missing values fall back to defaults and are
reported by report_missing_settings(); none of them is fatal at load time.
"""

import logging
from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# S3 caps presigned URL lifetime at seven days.
MAX_PRESIGNED_EXPIRY_SECONDS = 7 * 24 * 60 * 60

DEFAULT_PORT = 7878


class Settings(BaseSettings):
    """Gateway settings loaded from environment and .env."""

    # App
    app_name: str = "object-gateway"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "127.0.0.1:7878"

    # CORS
    allowed_origin: str = "*"

    # Storage
    s3_url: str = ""
    bucket_name: str = ""
    api_key: str = ""
    secret_key: SecretStr = SecretStr("")
    s3_region: str = "us-east-1"
    manage_https: bool = False
    ssl_cert_file: str = ""
    presigned_url_expiry_seconds: int = MAX_PRESIGNED_EXPIRY_SECONDS
    storage_connect_timeout: float = 5.0
    storage_read_timeout: float = 30.0
    storage_max_attempts: int = 3

    # Key derivation rules
    private_scope_enabled: bool = True
    attachment_exception_enabled: bool = True

    # Request / middleware
    request_timeout_seconds: float = 60.0
    request_id_header: str = "X-Request-ID"
    upload_relay_timeout_seconds: float = 300.0

    # Errors: False keeps the flat 500 contract; True maps to 400/404/502.
    strict_status_codes: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def allowed_origins(self) -> list[str]:
        """Return ALLOWED_ORIGIN split on commas."""
        return [o.strip() for o in self.allowed_origin.split(",") if o.strip()]

    @property
    def listen_address(self) -> tuple[str, int]:
        """Return (host, port) parsed from HOST ("host:port").

        A missing or malformed port is logged and replaced by DEFAULT_PORT.
        """
        host, sep, port = self.host.rpartition(":")
        if not sep:
            return self.host, DEFAULT_PORT
        host = host or "127.0.0.1"
        if not port.isdigit() or not 0 < int(port) < 65536:
            logger.warning(
                "Invalid port in HOST %r, using %d", self.host, DEFAULT_PORT
            )
            return host, DEFAULT_PORT
        return host, int(port)


def report_missing_settings(settings: Settings) -> list[str]:
    """Log every storage setting left at its empty default.

    Storage endpoint and credentials are logged at WARNING, the optional
    CA certificate at INFO. Returns the names of missing variables.
    """
    missing: list[str] = []
    required = {
        "S3_URL": settings.s3_url,
        "BUCKET_NAME": settings.bucket_name,
        "API_KEY": settings.api_key,
        "SECRET_KEY": settings.secret_key.get_secret_value(),
    }
    for name, value in required.items():
        if not value:
            logger.warning("Variable `%s` Not found", name)
            missing.append(name)
    if settings.manage_https and not settings.ssl_cert_file:
        logger.info("Variable `SSL_CERT_FILE` Not found")
        missing.append("SSL_CERT_FILE")
    return missing


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.
    """
    return Settings()
