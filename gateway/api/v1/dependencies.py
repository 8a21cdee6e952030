"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the storage collaborator, upload relay,
key deriver and the object use case. The storage collaborator and the
HTTP client are built once by the lifespan and read from app.state;
routes depend only on these dependencies, not on infra directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query, Request

from gateway.application.interfaces.storage import IObjectStorage, IUploadRelay
from gateway.application.services.key_deriver import KeyDerivationRules, KeyDeriver
from gateway.application.use_cases.objects import ObjectAccessService
from gateway.core.config import Settings, get_settings
from gateway.domain.value_objects import IdentifierSet
from gateway.infrastructure.exceptions import StorageConfigurationError
from gateway.infrastructure.external.relay import HttpUploadRelay


def get_storage(request: Request) -> IObjectStorage:
    """Return the shared storage collaborator.

    Raises:
        StorageConfigurationError: Storage could not be built at startup; the
            error from startup is raised again for every storage request.
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        error = getattr(request.app.state, "storage_error", None)
        raise error or StorageConfigurationError("storage backend not initialised")
    return storage


def get_upload_relay(request: Request) -> IUploadRelay | None:
    """Return an upload relay over the shared HTTP client, or None if absent."""
    client = getattr(request.app.state, "http_client", None)
    return HttpUploadRelay(client) if client is not None else None


def get_key_deriver(
    settings: Annotated[Settings, Depends(get_settings)],
) -> KeyDeriver:
    """Key deriver with the rules enabled for this deployment."""
    return KeyDeriver(
        KeyDerivationRules(
            private_scope=settings.private_scope_enabled,
            attachment_exception=settings.attachment_exception_enabled,
        )
    )


def get_object_access_service(
    storage: Annotated[IObjectStorage, Depends(get_storage)],
    relay: Annotated[IUploadRelay | None, Depends(get_upload_relay)],
    deriver: Annotated[KeyDeriver, Depends(get_key_deriver)],
) -> ObjectAccessService:
    """Build ObjectAccessService for one request."""
    return ObjectAccessService(storage=storage, relay=relay, deriver=deriver)


def get_identifier_query(
    container_type: str | None = Query(None),
    table_name: str | None = Query(None),
    column_name: str | None = Query(None),
    record_id: str | None = Query(None),
    user_id: str | None = Query(None),
    role_id: str | None = Query(None),
) -> IdentifierSet:
    """Identifier fields shared by every identifier route (query string part).

    Routes fill client_id, container_id and file_name from their path.
    """
    return IdentifierSet(
        container_type=container_type,
        table_name=table_name,
        column_name=column_name,
        record_id=record_id,
        user_id=user_id,
        role_id=role_id,
    )
