"""Storage interfaces (ports) for the application layer.

Protocols define the contract the gateway needs from the object store and
from the HTTP relay used for proxied uploads (DIP).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gateway.application.dtos.object import ObjectEntry
    from gateway.domain.enums import SignMethod


class IObjectStorage(Protocol):
    """Protocol for an S3-compatible object store bound to one bucket."""

    bucket: str

    async def sign(
        self,
        key: str,
        method: "SignMethod",
        expires_in: int | None = None,
    ) -> str:
        """Return a presigned URL for key valid for method; expires_in in seconds."""
        ...

    async def list(self, prefix: str) -> list["ObjectEntry"]:
        """Return every object whose key starts with prefix."""
        ...

    async def delete(self, key: str) -> None:
        """Remove key. Raises StorageNotFoundError if it does not exist."""
        ...


class IUploadRelay(Protocol):
    """Protocol for forwarding a request body to a presigned upload URL."""

    async def put(
        self,
        url: str,
        body: AsyncIterator[bytes],
        content_type: str | None = None,
        content_length: int | None = None,
    ) -> int:
        """Stream body to url with PUT. Returns the upstream status code."""
        ...
