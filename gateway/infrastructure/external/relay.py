"""HTTP relay for proxied uploads: streams a request body to a presigned PUT URL."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx

from gateway.infrastructure.exceptions import StorageUploadError


class HttpUploadRelay:
    """Forward a body to a presigned URL with a shared httpx.AsyncClient.

    The client is owned by the application lifespan; this class never
    closes it.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def put(
        self,
        url: str,
        body: AsyncIterator[bytes],
        content_type: str | None = None,
        content_length: int | None = None,
    ) -> int:
        """Stream body to url. Returns the upstream status; non-2xx raises StorageUploadError."""
        headers: dict[str, str] = {}
        if content_type:
            headers["Content-Type"] = content_type
        if content_length is not None:
            headers["Content-Length"] = str(content_length)
        target = httpx.URL(url)
        try:
            response = await self._client.put(target, content=body, headers=headers)
        except httpx.HTTPError as e:
            raise StorageUploadError(target.path, str(e)) from e
        if not response.is_success:
            raise StorageUploadError(
                target.path,
                f"upstream returned {response.status_code}: {response.text[:200]}",
            )
        return response.status_code
