"""Tests for object endpoints (presign, list, redirect, upload, delete)."""

import asyncio
from urllib.parse import parse_qs, urlsplit

import pytest
from httpx import ASGITransport, AsyncClient

from gateway.api.v1.dependencies import get_upload_relay
from gateway.application.dtos.object import ObjectEntry
from gateway.core.config import get_settings
from gateway.infrastructure.exceptions import (
    StorageConfigurationError,
    StorageListError,
    StorageSignError,
)
from gateway.main import create_app


@pytest.fixture
def strict(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable STRICT_STATUS_CODES for the test."""
    monkeypatch.setenv("STRICT_STATUS_CODES", "true")
    get_settings.cache_clear()


async def test_presigned_url_defaults_to_put(client: AsyncClient, storage) -> None:
    """GET /presigned-url/{client}/{container}/{file} signs a PUT for the derived key."""
    response = await client.get(
        "/presigned-url/Acme/100/Report.pdf", params={"container_type": "window"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["file_name"] == "acme/client/window/100/report.pdf"
    assert "method=PUT" in body["url"]
    assert storage.calls[0][0] == "sign"


async def test_presigned_url_get_with_expiry(client: AsyncClient) -> None:
    """method and seconds query parameters are honoured."""
    response = await client.get(
        "/presigned-url/acme/100/a.txt",
        params={"container_type": "form", "method": "GET", "seconds": 120},
    )
    assert response.status_code == 200
    query = parse_qs(urlsplit(response.json()["url"]).query)
    assert query["method"] == ["GET"]
    assert query["expires"] == ["120"]


async def test_presigned_url_with_scope_and_row(client: AsyncClient) -> None:
    """Query identifiers shape the key: user scope, table, record and column."""
    response = await client.get(
        "/presigned-url/acme/100/photo.png",
        params={
            "container_type": "window",
            "table_name": "C_Order",
            "record_id": "7",
            "column_name": "Image",
            "user_id": "u1",
            "role_id": "r1",
        },
    )
    assert response.status_code == 200
    assert response.json()["file_name"] == (
        "acme/user/u1/window/100/c_order/7/image/photo.png"
    )


async def test_presigned_url_sanitizes_segments(client: AsyncClient) -> None:
    """Unsafe characters in identifiers become underscores."""
    response = await client.get(
        "/presigned-url/Acme Co/INV 01/invoice 1.pdf", params={"container_type": "Form"}
    )
    assert response.status_code == 200
    assert response.json()["file_name"] == "acme_co/client/form/inv_01/invoice_1.pdf"


async def test_presigned_url_for_attachment(client: AsyncClient) -> None:
    """Attachments use the route without a container id."""
    response = await client.get(
        "/presigned-url/acme/a.txt",
        params={"container_type": "attachment", "table_name": "t", "record_id": "1"},
    )
    assert response.status_code == 200
    assert response.json()["file_name"] == "acme/client/attachment/t/1/a.txt"


async def test_attachment_without_row_fails(client: AsyncClient) -> None:
    """Attachment without table and record is rejected with the rule message."""
    response = await client.get(
        "/presigned-url/acme/a.txt", params={"container_type": "attachment"}
    )
    assert response.status_code == 500
    assert response.json() == "Invalid Container Type (Mandatory Record ID and Table Name)"


async def test_validation_error_is_500_json_string(client: AsyncClient, storage) -> None:
    """Rule violations return 500 with the message as a JSON string by default."""
    response = await client.get("/presigned-url/acme/100/a.txt")
    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == "Container Type is Mandatory"
    assert storage.calls == []


async def test_invalid_container_type(client: AsyncClient) -> None:
    """Unknown container type is reported as such."""
    response = await client.get(
        "/presigned-url/acme/100/a.txt", params={"container_type": "folder"}
    )
    assert response.status_code == 500
    assert response.json() == "Invalid Container Type"


async def test_validation_error_strict_is_400(client: AsyncClient, strict) -> None:
    """With STRICT_STATUS_CODES rule violations become 400."""
    response = await client.get(
        "/presigned-url/acme/100/a.txt",
        params={"container_type": "window", "table_name": "orders"},
    )
    assert response.status_code == 400
    assert response.json() == "Record ID is Mandatory"


async def test_expiry_out_of_range(client: AsyncClient, storage) -> None:
    """seconds outside 1..604800 is rejected before signing."""
    response = await client.get(
        "/presigned-url/acme/100/a.txt",
        params={"container_type": "window", "seconds": 0},
    )
    assert response.status_code == 500
    assert storage.calls == []


async def test_unknown_method_is_422(client: AsyncClient) -> None:
    """method must be GET or PUT."""
    response = await client.get(
        "/presigned-url/acme/100/a.txt",
        params={"container_type": "window", "method": "POST"},
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_sign_error_is_500(client: AsyncClient, storage) -> None:
    """Storage failures surface as 500 with the storage message."""
    storage.fail_with = StorageSignError("acme/client/window/100/a.txt", "no credentials")
    response = await client.get(
        "/presigned-url/acme/100/a.txt", params={"container_type": "window"}
    )
    assert response.status_code == 500
    assert "no credentials" in response.json()


async def test_sign_error_strict_is_502(client: AsyncClient, storage, strict) -> None:
    """With STRICT_STATUS_CODES upstream storage failures become 502."""
    storage.fail_with = StorageSignError("k", "no credentials")
    response = await client.get(
        "/presigned-url/acme/100/a.txt", params={"container_type": "window"}
    )
    assert response.status_code == 502


async def test_query_variant(client: AsyncClient) -> None:
    """GET /api/presignedUrl takes every identifier from the query string."""
    response = await client.get(
        "/api/presignedUrl",
        params={
            "client_id": "acme",
            "container_type": "window",
            "container_id": "1",
            "file_name": "a.txt",
            "method": "GET",
        },
    )
    assert response.status_code == 200
    assert response.json()["file_name"] == "acme/client/window/1/a.txt"


@pytest.mark.parametrize("params", [{}, {"file_name": "  "}])
async def test_query_variant_missing_file_name_plain_text(
    client: AsyncClient, storage, params: dict
) -> None:
    """Missing file name on the query variant is a plain-text 500."""
    response = await client.get(
        "/api/presignedUrl",
        params={"client_id": "acme", "container_type": "window", "container_id": "1", **params},
    )
    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "File Name is mandatory"
    assert storage.calls == []


async def test_list_resources(client: AsyncClient, storage) -> None:
    """GET /resources lists everything under the derived prefix."""
    storage.add(ObjectEntry(name="acme/client/window/100/a.pdf", size_bytes=3, etag="e"))
    storage.add(ObjectEntry(name="acme/client/window/1001/b.pdf"))
    response = await client.get(
        "/resources",
        params={"client_id": "acme", "container_type": "window", "container_id": "100"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["parent_folder"] == "acme/client/window/100"
    assert [r["name"] for r in body["resources"]] == ["acme/client/window/100/a.pdf"]
    resource = body["resources"][0]
    assert resource["content_type"] == "application/pdf"
    assert resource["size"] == 3
    assert resource["is_latest"] is False
    assert storage.calls == [("list", "acme/client/window/100/")]


async def test_list_resources_missing_client(client: AsyncClient, storage) -> None:
    """Listing without client id fails before storage is touched."""
    response = await client.get("/resources", params={"container_type": "window"})
    assert response.status_code == 500
    assert response.json() == "Client ID is Mandatory"
    assert storage.calls == []


async def test_list_error(client: AsyncClient, storage) -> None:
    """Listing failures surface with the storage message."""
    storage.fail_with = StorageListError("acme/client/window/1/", "timeout")
    response = await client.get(
        "/resources",
        params={"client_id": "acme", "container_type": "window", "container_id": "1"},
    )
    assert response.status_code == 500
    assert "timeout" in response.json()


async def test_resource_redirects_to_presigned_get(client: AsyncClient, storage) -> None:
    """GET /resources/{key} answers 307 to a presigned GET URL."""
    response = await client.get("/resources/acme/client/window/1/a.txt")
    assert response.status_code == 307
    location = response.headers["location"]
    assert location.startswith("https://storage.test/test-bucket/acme/client/window/1/a.txt")
    assert "method=GET" in location


async def test_download_url(client: AsyncClient) -> None:
    """GET /download-url/{key} returns the presigned GET URL as JSON."""
    response = await client.get("/download-url/acme/client/window/1/a.txt", params={"seconds": 30})
    assert response.status_code == 200
    url = response.json()["url"]
    assert "method=GET" in url
    assert "expires=30" in url


async def test_delete_resource(client: AsyncClient, storage) -> None:
    """DELETE /resources/{key} removes the object and returns 204."""
    storage.add(ObjectEntry(name="acme/x.txt"))
    response = await client.delete("/resources/acme/x.txt")
    assert response.status_code == 204
    assert response.content == b""
    assert "acme/x.txt" not in storage.objects


async def test_delete_missing_resource(client: AsyncClient) -> None:
    """Deleting a key that does not exist is reported."""
    response = await client.delete("/resources/acme/missing.txt")
    assert response.status_code == 500
    assert response.json() == "Object not found: acme/missing.txt"


async def test_delete_missing_resource_strict_is_404(client: AsyncClient, strict) -> None:
    """With STRICT_STATUS_CODES a missing object is 404."""
    response = await client.delete("/resources/acme/missing.txt")
    assert response.status_code == 404


async def test_delete_object_by_identifiers(client: AsyncClient, storage) -> None:
    """DELETE /objects/{client}/{container}/{file} deletes the derived key."""
    storage.add(ObjectEntry(name="acme/client/window/100/report.pdf"))
    response = await client.delete(
        "/objects/acme/100/Report.pdf", params={"container_type": "window"}
    )
    assert response.status_code == 204
    assert storage.objects == {}


async def test_proxy_upload(client: AsyncClient, relay) -> None:
    """PUT /upload/... relays the body and returns only the key."""
    response = await client.put(
        "/upload/acme/100/notes.txt",
        params={"container_type": "window"},
        content=b"hello",
        headers={"Content-Type": "text/plain"},
    )
    assert response.status_code == 200
    assert response.json() == {"file_name": "acme/client/window/100/notes.txt"}
    upload = relay.uploads[0]
    assert upload["body"] == b"hello"
    assert upload["content_type"] == "text/plain"
    assert upload["content_length"] == 5
    assert "url" not in response.json()


async def test_storage_not_configured(app, client: AsyncClient) -> None:
    """Storage requests fail with the startup configuration error."""
    app.state.storage = None
    app.state.storage_error = StorageConfigurationError("BUCKET_NAME is not set", "BUCKET_NAME")
    response = await client.get(
        "/presigned-url/acme/100/a.txt", params={"container_type": "window"}
    )
    assert response.status_code == 500
    assert response.json() == "Invalid storage configuration: BUCKET_NAME is not set"


async def test_private_scope_disabled(client: AsyncClient, monkeypatch) -> None:
    """PRIVATE_SCOPE_ENABLED=false ignores user and role ids."""
    monkeypatch.setenv("PRIVATE_SCOPE_ENABLED", "false")
    get_settings.cache_clear()
    response = await client.get(
        "/presigned-url/acme/100/a.txt",
        params={"container_type": "window", "user_id": "u1"},
    )
    assert response.json()["file_name"] == "acme/client/window/100/a.txt"


class _SlowRelay:
    """Relay that takes longer than the request timeout."""

    def __init__(self) -> None:
        self.bodies: list[bytes] = []

    async def put(self, url, body, content_type=None, content_length=None) -> int:
        self.bodies.append(b"".join([chunk async for chunk in body]))
        await asyncio.sleep(0.3)
        return 200


async def test_upload_not_cut_by_request_timeout(monkeypatch, storage) -> None:
    """Proxied uploads outlive REQUEST_TIMEOUT_SECONDS; other routes get 504."""
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "0.1")
    get_settings.cache_clear()
    application = create_app()
    application.state.storage = storage
    application.state.storage_error = None
    slow_relay = _SlowRelay()
    application.dependency_overrides[get_upload_relay] = lambda: slow_relay

    async def slow_sign(*args, **kwargs) -> str:
        await asyncio.sleep(0.3)
        return "https://storage.test/late"

    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        upload = await ac.put(
            "/upload/acme/100/big.bin",
            params={"container_type": "window"},
            content=b"payload",
        )
        monkeypatch.setattr(storage, "sign", slow_sign)
        presign = await ac.get(
            "/presigned-url/acme/100/a.txt", params={"container_type": "window"}
        )

    assert upload.status_code == 200
    assert upload.json() == {"file_name": "acme/client/window/100/big.bin"}
    assert slow_relay.bodies == [b"payload"]
    assert presign.status_code == 504
    assert presign.json() == "Request timed out after 0.1 seconds"
