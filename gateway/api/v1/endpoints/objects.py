"""Object API: thin routes delegating to ObjectAccessService.

Identifier routes take client/container/file from the path and the rest of
the identifier set from the query string. Raw-key routes take a key that a
previous identifier route returned as file_name.
"""

from dataclasses import replace
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import PlainTextResponse, RedirectResponse

from gateway.api.v1.dependencies import (
    get_identifier_query,
    get_object_access_service,
)
from gateway.application.use_cases.objects import ObjectAccessService
from gateway.domain.enums import SignMethod
from gateway.domain.value_objects import IdentifierSet
from gateway.schemas.object import (
    DownloadUrlResponse,
    PresignedUrlResponse,
    ResourceResponse,
    UploadResponse,
)

router = APIRouter()

Service = Annotated[ObjectAccessService, Depends(get_object_access_service)]
QueryIds = Annotated[IdentifierSet, Depends(get_identifier_query)]

FILE_NAME_MANDATORY = "File Name is mandatory"


@router.get("/resources", response_model=ResourceResponse)
async def list_resources(
    svc: Service,
    ids: QueryIds,
    client_id: str | None = Query(None),
    container_id: str | None = Query(None),
):
    """List objects under the prefix derived from the query identifiers."""
    listing = await svc.list_objects(
        replace(ids, client_id=client_id, container_id=container_id)
    )
    return ResourceResponse.model_validate(listing)


@router.get("/resources/{path:path}")
async def redirect_to_resource(
    path: str,
    svc: Service,
    seconds: int | None = Query(None),
) -> RedirectResponse:
    """Redirect to a presigned GET URL for the stored key."""
    signed = await svc.sign_key(path, SignMethod.GET, seconds)
    return RedirectResponse(signed.url, status_code=307)


@router.delete("/resources/{path:path}", status_code=204)
async def delete_resource(path: str, svc: Service) -> Response:
    """Delete the stored key. Empty body on success."""
    await svc.delete_key(path)
    return Response(status_code=204)


@router.get("/download-url/{path:path}", response_model=DownloadUrlResponse)
async def get_download_url(
    path: str,
    svc: Service,
    seconds: int | None = Query(None),
) -> DownloadUrlResponse:
    """Return a presigned GET URL for the stored key."""
    signed = await svc.sign_key(path, SignMethod.GET, seconds)
    return DownloadUrlResponse(url=signed.url)


@router.get(
    "/presigned-url/{client_id}/{container_id}/{file_name}",
    response_model=PresignedUrlResponse,
)
async def get_presigned_url(
    client_id: str,
    container_id: str,
    file_name: str,
    svc: Service,
    ids: QueryIds,
    method: SignMethod = Query(SignMethod.PUT),
    seconds: int | None = Query(None),
) -> PresignedUrlResponse:
    """Presign the derived key (PUT by default) and return it with the URL."""
    signed = await svc.sign_object(
        replace(ids, client_id=client_id, container_id=container_id, file_name=file_name),
        method,
        seconds,
    )
    return PresignedUrlResponse(url=signed.url, file_name=signed.file_name)


@router.get(
    "/presigned-url/{client_id}/{file_name}",
    response_model=PresignedUrlResponse,
)
async def get_presigned_url_without_container(
    client_id: str,
    file_name: str,
    svc: Service,
    ids: QueryIds,
    method: SignMethod = Query(SignMethod.PUT),
    seconds: int | None = Query(None),
) -> PresignedUrlResponse:
    """Same as get_presigned_url for attachments, which have no container id."""
    signed = await svc.sign_object(
        replace(ids, client_id=client_id, file_name=file_name),
        method,
        seconds,
    )
    return PresignedUrlResponse(url=signed.url, file_name=signed.file_name)


@router.get("/api/presignedUrl", response_model=PresignedUrlResponse)
async def get_presigned_url_by_query(
    svc: Service,
    ids: QueryIds,
    file_name: str | None = Query(None),
    client_id: str | None = Query(None),
    container_id: str | None = Query(None),
    method: SignMethod = Query(SignMethod.PUT),
    seconds: int | None = Query(None),
):
    """Query-string variant; a missing file name is answered in plain text."""
    if not file_name or not file_name.strip():
        return PlainTextResponse(FILE_NAME_MANDATORY, status_code=500)
    signed = await svc.sign_object(
        replace(ids, client_id=client_id, container_id=container_id, file_name=file_name),
        method,
        seconds,
    )
    return PresignedUrlResponse(url=signed.url, file_name=signed.file_name)


@router.put(
    "/upload/{client_id}/{container_id}/{file_name}",
    response_model=UploadResponse,
)
async def proxy_upload(
    client_id: str,
    container_id: str,
    file_name: str,
    request: Request,
    svc: Service,
    ids: QueryIds,
) -> UploadResponse:
    """Relay the request body to storage; the signed URL is never returned."""
    content_length = request.headers.get("content-length")
    key = await svc.proxy_upload(
        replace(ids, client_id=client_id, container_id=container_id, file_name=file_name),
        request.stream(),
        content_type=request.headers.get("content-type"),
        content_length=int(content_length) if content_length and content_length.isdigit() else None,
    )
    return UploadResponse(file_name=key)


@router.delete("/objects/{client_id}/{container_id}/{file_name}", status_code=204)
async def delete_object(
    client_id: str,
    container_id: str,
    file_name: str,
    svc: Service,
    ids: QueryIds,
) -> Response:
    """Delete the object at the derived key. Empty body on success."""
    await svc.delete_object(
        replace(ids, client_id=client_id, container_id=container_id, file_name=file_name)
    )
    return Response(status_code=204)
