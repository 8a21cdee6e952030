"""Request ID middleware.

Forwards a client X-Request-ID (or generates one), binds it to the logging
context for the duration of the request and echoes it on the response.
Client values outside [A-Za-z0-9_-]{1,64} are replaced so they cannot
inject into log lines. Raw ASGI.
"""

import re
import uuid
from typing import Callable

from starlette.datastructures import Headers, MutableHeaders

from gateway.shared.context import reset_request_id, set_request_id

_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


def resolve_request_id(raw: str | None) -> str:
    """Return the client value when safe to log, else a fresh uuid4 hex."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Bind a request ID to logs and the response header. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(Headers(scope=scope).get(header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_header(message: dict) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(header_name, request_id)
            await send(message)

        token = set_request_id(request_id)
        try:
            await app(scope, receive, send_with_header)
        finally:
            reset_request_id(token)

    return asgi_app
