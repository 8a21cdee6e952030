"""Pytest configuration and fixtures for the object gateway.

HTTP tests run against create_app() through httpx's ASGITransport (no
lifespan), with an in-memory storage collaborator placed on app.state and
a recording upload relay.
"""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from gateway.api.v1.dependencies import get_upload_relay
from gateway.application.dtos.object import ObjectEntry
from gateway.core.config import Settings, get_settings
from gateway.domain.enums import SignMethod
from gateway.infrastructure.exceptions import StorageNotFoundError
from gateway.main import create_app


class FakeObjectStorage:
    """In-memory IObjectStorage that records every call."""

    bucket = "test-bucket"

    def __init__(self) -> None:
        self.objects: dict[str, ObjectEntry] = {}
        self.calls: list[tuple] = []
        self.fail_with: Exception | None = None

    def add(self, entry: ObjectEntry) -> None:
        self.objects[entry.name] = entry

    async def sign(
        self, key: str, method: SignMethod, expires_in: int | None = None
    ) -> str:
        self.calls.append(("sign", key, method, expires_in))
        if self.fail_with is not None:
            raise self.fail_with
        expiry = expires_in if expires_in is not None else 604800
        return f"https://storage.test/{self.bucket}/{key}?method={method.value}&expires={expiry}"

    async def list(self, prefix: str) -> list[ObjectEntry]:
        self.calls.append(("list", prefix))
        if self.fail_with is not None:
            raise self.fail_with
        return [e for k, e in sorted(self.objects.items()) if k.startswith(prefix)]

    async def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        if self.fail_with is not None:
            raise self.fail_with
        if key not in self.objects:
            raise StorageNotFoundError(key)
        del self.objects[key]


class RecordingRelay:
    """IUploadRelay that drains the body and remembers what it received."""

    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.uploads: list[dict] = []
        self.fail_with: Exception | None = None

    async def put(
        self,
        url: str,
        body: AsyncIterator[bytes],
        content_type: str | None = None,
        content_length: int | None = None,
    ) -> int:
        data = b"".join([chunk async for chunk in body])
        if self.fail_with is not None:
            raise self.fail_with
        self.uploads.append(
            {
                "url": url,
                "body": data,
                "content_type": content_type,
                "content_length": content_length,
            }
        )
        return self.status


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Isolate tests from the host environment and the settings cache."""
    for name in Settings.model_fields:
        monkeypatch.delenv(name.upper(), raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def storage() -> FakeObjectStorage:
    """Empty in-memory storage collaborator."""
    return FakeObjectStorage()


@pytest.fixture
def relay() -> RecordingRelay:
    """Upload relay that records relayed bodies."""
    return RecordingRelay()


@pytest.fixture
def app(storage: FakeObjectStorage, relay: RecordingRelay):
    """Fresh application wired to the fake storage and relay."""
    application = create_app()
    application.state.storage = storage
    application.state.storage_error = None
    application.dependency_overrides[get_upload_relay] = lambda: relay
    return application


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
