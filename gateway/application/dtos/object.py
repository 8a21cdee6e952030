"""DTOs for object use cases (storage entries, listings, signed URLs)."""

import mimetypes
from dataclasses import dataclass, field
from datetime import datetime

from gateway.domain.enums import SignMethod

DEFAULT_CONTENT_TYPE = "application/octet-stream"
LAST_MODIFIED_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class ObjectEntry:
    """One object as reported by the storage collaborator's listing."""

    name: str
    last_modified: datetime | None = None
    etag: str | None = None
    size_bytes: int | None = None
    storage_class: str | None = None
    owner_name: str | None = None
    is_latest: bool = False
    version_id: str | None = None
    user_metadata: dict[str, str] | None = None
    is_prefix: bool = False
    is_delete_marker: bool = False
    encoding_type: str | None = None


@dataclass(frozen=True)
class ResourceItem:
    """Listing record returned to the caller."""

    name: str
    last_modified: str | None
    etag: str | None
    owner_name: str | None
    size: int | None
    storage_class: str | None
    is_latest: bool
    version_id: str | None
    user_metadata: dict[str, str] | None
    is_prefix: bool
    is_delete_marker: bool
    encoding_type: str | None
    content_type: str

    @classmethod
    def from_entry(cls, entry: ObjectEntry) -> "ResourceItem":
        """Build a response record; content type is guessed from the extension."""
        content_type = mimetypes.guess_type(entry.name)[0] or DEFAULT_CONTENT_TYPE
        last_modified = (
            entry.last_modified.strftime(LAST_MODIFIED_FORMAT)
            if entry.last_modified is not None
            else None
        )
        return cls(
            name=entry.name,
            last_modified=last_modified,
            etag=entry.etag,
            owner_name=entry.owner_name,
            size=entry.size_bytes,
            storage_class=entry.storage_class,
            is_latest=entry.is_latest,
            version_id=entry.version_id,
            user_metadata=entry.user_metadata,
            is_prefix=entry.is_prefix,
            is_delete_marker=entry.is_delete_marker,
            encoding_type=entry.encoding_type,
            content_type=content_type,
        )


@dataclass(frozen=True)
class ResourceListing:
    """Result of a prefix listing."""

    parent_folder: str
    resources: list[ResourceItem] = field(default_factory=list)


@dataclass(frozen=True)
class SignedUrl:
    """Presigned URL together with the key it grants access to."""

    url: str
    file_name: str
    method: SignMethod
    expires_in: int | None = None
