"""Object operations: one request, one derived key, one storage call.

ObjectAccessService never parses identifiers itself; it asks the key
deriver for a key or prefix and hands it to the storage collaborator.
Validation failures are raised before any storage call. Storage failures
are logged and re-raised unchanged; no retries here.
"""

from __future__ import annotations

import logging
import re
from collections.abc import AsyncIterator

from gateway.application.dtos.object import ResourceItem, ResourceListing, SignedUrl
from gateway.application.interfaces.storage import IObjectStorage, IUploadRelay
from gateway.application.services.key_deriver import KeyDeriver
from gateway.core.config import MAX_PRESIGNED_EXPIRY_SECONDS
from gateway.domain.enums import SignMethod
from gateway.domain.exceptions import GatewayException, ValidationException
from gateway.domain.value_objects import IdentifierSet

logger = logging.getLogger(__name__)

_SLASHES_RE = re.compile(r"/+")


def normalize_object_key(raw: str) -> str:
    """Normalize a caller-supplied object key.

    Strips surrounding whitespace and leading slashes and collapses repeated
    slashes. Empty keys and "." / ".." segments are rejected.

    Raises:
        ValidationException: Key is empty or contains a relative segment.
    """
    key = _SLASHES_RE.sub("/", raw.strip()).lstrip("/")
    if not key or any(part in (".", "..") for part in key.split("/")):
        raise ValidationException("Invalid Object Key", field="key")
    return key


def _check_expiry(expires_in: int | None) -> None:
    if expires_in is None:
        return
    if not 1 <= expires_in <= MAX_PRESIGNED_EXPIRY_SECONDS:
        raise ValidationException(
            f"Expiry must be between 1 and {MAX_PRESIGNED_EXPIRY_SECONDS} seconds",
            field="seconds",
        )


class ObjectAccessService:
    """Binds each object request to a derived key and a single storage call."""

    def __init__(
        self,
        storage: IObjectStorage,
        relay: IUploadRelay | None = None,
        deriver: KeyDeriver | None = None,
    ) -> None:
        self.storage = storage
        self.relay = relay
        self.deriver = deriver or KeyDeriver()

    async def _sign(
        self, key: str, method: SignMethod, expires_in: int | None
    ) -> SignedUrl:
        try:
            url = await self.storage.sign(key, method, expires_in)
        except GatewayException as e:
            logger.warning("Error signing %s %s: %s", method.value, key, e.message)
            raise
        return SignedUrl(url=url, file_name=key, method=method, expires_in=expires_in)

    async def sign_object(
        self,
        ids: IdentifierSet,
        method: SignMethod = SignMethod.GET,
        expires_in: int | None = None,
    ) -> SignedUrl:
        """Derive the object key for ids and return a presigned URL for it."""
        key = self.deriver.derive_object_key(ids)
        _check_expiry(expires_in)
        return await self._sign(key, method, expires_in)

    async def sign_key(
        self,
        key: str,
        method: SignMethod = SignMethod.GET,
        expires_in: int | None = None,
    ) -> SignedUrl:
        """Return a presigned URL for an already derived key."""
        normalized = normalize_object_key(key)
        _check_expiry(expires_in)
        return await self._sign(normalized, method, expires_in)

    async def proxy_upload(
        self,
        ids: IdentifierSet,
        body: AsyncIterator[bytes],
        content_type: str | None = None,
        content_length: int | None = None,
    ) -> str:
        """Sign a PUT for the derived key and relay body to it.

        The signed URL stays inside the gateway. Returns the object key.
        """
        if self.relay is None:
            raise GatewayException("Upload relay is not configured", "RELAY_NOT_CONFIGURED")
        signed = await self.sign_object(ids, SignMethod.PUT)
        try:
            await self.relay.put(
                signed.url,
                body,
                content_type=content_type,
                content_length=content_length,
            )
        except GatewayException as e:
            logger.warning("Error relaying upload for %s: %s", signed.file_name, e.message)
            raise
        return signed.file_name

    async def list_objects(self, ids: IdentifierSet) -> ResourceListing:
        """List every object under the scope prefix derived from ids."""
        prefix = self.deriver.derive_scope_prefix(ids.without_file_name())
        try:
            entries = await self.storage.list(f"{prefix}/")
        except GatewayException as e:
            logger.warning("Error listing %s: %s", prefix, e.message)
            raise
        return ResourceListing(
            parent_folder=prefix,
            resources=[ResourceItem.from_entry(entry) for entry in entries],
        )

    async def _delete(self, key: str) -> None:
        try:
            await self.storage.delete(key)
        except GatewayException as e:
            logger.warning("Error deleting %s: %s", key, e.message)
            raise

    async def delete_object(self, ids: IdentifierSet) -> None:
        """Delete the object at the key derived from ids."""
        await self._delete(self.deriver.derive_object_key(ids))

    async def delete_key(self, key: str) -> None:
        """Delete an already derived key."""
        await self._delete(normalize_object_key(key))
