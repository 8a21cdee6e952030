"""S3-compatible object storage (AWS S3, MinIO) with presigned URLs, listing and removal."""

from __future__ import annotations

import asyncio
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from gateway.application.dtos.object import ObjectEntry
from gateway.core.config import MAX_PRESIGNED_EXPIRY_SECONDS
from gateway.domain.enums import SignMethod
from gateway.infrastructure.exceptions import (
    StorageDeleteError,
    StorageListError,
    StorageNotFoundError,
    StorageSignError,
)

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def _entry_from_content(item: dict[str, Any]) -> ObjectEntry:
    """Map one list_objects_v2 Contents item to an ObjectEntry.

    ListObjectsV2 carries no version information, so is_latest stays False.
    """
    etag = item.get("ETag")
    owner = item.get("Owner") or {}
    return ObjectEntry(
        name=item["Key"],
        last_modified=item.get("LastModified"),
        etag=etag.strip('"') if etag else None,
        size_bytes=item.get("Size"),
        storage_class=item.get("StorageClass"),
        owner_name=owner.get("DisplayName"),
        is_latest=False,
    )


class S3StorageService:
    """S3-compatible storage bound to one bucket.

    Uses boto3 (sync) via asyncio.to_thread for the async API, so the
    awaiting request can be cancelled or timed out. Retries and backoff
    are left to botocore's retry config.
    """

    def __init__(
        self,
        bucket: str,
        endpoint_url: str | None = None,
        region: str = "us-east-1",
        access_key: str | None = None,
        secret_key: str | None = None,
        use_ssl: bool = True,
        verify: bool | str = True,
        connect_timeout: float = 5.0,
        read_timeout: float = 30.0,
        max_attempts: int = 3,
        default_expiry: int = MAX_PRESIGNED_EXPIRY_SECONDS,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            endpoint_url: Custom endpoint (MinIO); None for AWS.
            region: Region used for signing.
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            use_ssl: Talk TLS to the endpoint.
            verify: True, False, or path to a CA bundle.
            connect_timeout: Seconds to establish a connection.
            read_timeout: Seconds to wait for a response.
            max_attempts: Total attempts per SDK call (botocore standard retries).
            default_expiry: Presigned URL lifetime when the caller gives none.
        """
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.default_expiry = default_expiry
        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": "path"},
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            retries={"max_attempts": max_attempts, "mode": "standard"},
        )
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            use_ssl=use_ssl,
            verify=verify,
            config=config,
            **extra,
        )

    async def sign(
        self,
        key: str,
        method: SignMethod,
        expires_in: int | None = None,
    ) -> str:
        """Return presigned URL for key (GET or PUT)."""
        expiry = expires_in if expires_in is not None else self.default_expiry

        def _presign() -> str:
            try:
                return self._client.generate_presigned_url(
                    method.client_method,
                    Params={"Bucket": self.bucket, "Key": key},
                    ExpiresIn=expiry,
                )
            except (BotoCoreError, ClientError) as e:
                raise StorageSignError(key, str(e)) from e

        return await asyncio.to_thread(_presign)

    async def list(self, prefix: str) -> list[ObjectEntry]:
        """Return all objects under prefix, following continuation tokens."""
        def _list() -> list[ObjectEntry]:
            try:
                paginator = self._client.get_paginator("list_objects_v2")
                entries: list[ObjectEntry] = []
                for page in paginator.paginate(
                    Bucket=self.bucket, Prefix=prefix, FetchOwner=True
                ):
                    entries.extend(
                        _entry_from_content(item) for item in page.get("Contents", [])
                    )
                return entries
            except (BotoCoreError, ClientError) as e:
                raise StorageListError(prefix, str(e)) from e

        return await asyncio.to_thread(_list)

    async def delete(self, key: str) -> None:
        """Delete object; a missing object is reported, not ignored."""
        def _delete() -> None:
            try:
                self._client.head_object(Bucket=self.bucket, Key=key)
            except ClientError as e:
                if _error_code(e) in _NOT_FOUND_CODES:
                    raise StorageNotFoundError(key) from e
                raise StorageDeleteError(key, str(e)) from e
            except BotoCoreError as e:
                raise StorageDeleteError(key, str(e)) from e
            try:
                self._client.delete_object(Bucket=self.bucket, Key=key)
            except (BotoCoreError, ClientError) as e:
                raise StorageDeleteError(key, str(e)) from e

        await asyncio.to_thread(_delete)
