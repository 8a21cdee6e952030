"""Object API schemas."""

from pydantic import BaseModel, ConfigDict


class PresignedUrlResponse(BaseModel):
    """Response for GET /presigned-url/...: URL plus the derived key to store."""

    url: str
    file_name: str


class DownloadUrlResponse(BaseModel):
    """Response for GET /download-url/{path}."""

    url: str


class UploadResponse(BaseModel):
    """Response for PUT /upload/...: key the body was stored under."""

    file_name: str


class ResourceSchema(BaseModel):
    """One listed object."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    last_modified: str | None = None
    etag: str | None = None
    owner_name: str | None = None
    size: int | None = None
    storage_class: str | None = None
    is_latest: bool
    version_id: str | None = None
    user_metadata: dict[str, str] | None = None
    is_prefix: bool
    is_delete_marker: bool
    encoding_type: str | None = None
    content_type: str | None = None


class ResourceResponse(BaseModel):
    """Response for GET /resources (prefix listing)."""

    model_config = ConfigDict(from_attributes=True)

    parent_folder: str | None = None
    resources: list[ResourceSchema] | None = None
