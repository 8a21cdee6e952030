"""Application lifespan: startup and shutdown.

Builds the shared, read-only collaborators once per process: the storage
service and the outbound HTTP client used by the upload relay. A storage
configuration error is logged and kept on app.state so that storage
requests fail one by one while the process keeps serving.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from gateway.core.config import get_settings, report_missing_settings
from gateway.infrastructure.exceptions import StorageConfigurationError
from gateway.infrastructure.external.storage import StorageFactory

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build storage and HTTP client, yield, then close the HTTP client."""
    settings = get_settings()
    report_missing_settings(settings)

    # ---- Startup ----
    try:
        app.state.storage = StorageFactory.create_storage_service(settings)
        app.state.storage_error = None
        logger.info(
            "Storage ready: bucket=%s endpoint=%s",
            app.state.storage.bucket,
            app.state.storage.endpoint_url,
        )
    except StorageConfigurationError as e:
        app.state.storage = None
        app.state.storage_error = e
        logger.error("Storage not configured: %s", e.message)

    app.state.http_client = httpx.AsyncClient(
        timeout=settings.upload_relay_timeout_seconds,
        verify=settings.ssl_cert_file if settings.manage_https and settings.ssl_cert_file else True,
    )
    logger.info("Server Address: %s", settings.host)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")
