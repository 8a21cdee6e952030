"""Request timeout middleware.

Bounds every HTTP request with asyncio.wait_for. Cancelling the request
task also abandons any storage call it is awaiting. When nothing has been
sent yet the client gets 504 with a JSON string body, the same shape as
other gateway errors. Paths under exempt_prefixes (proxied uploads) are not
bounded here; the upload relay's own timeouts apply to them. Raw ASGI.
"""

import asyncio
import logging
from typing import Callable

from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


def TimeoutMiddleware(
    app: Callable,
    timeout_seconds: float,
    exempt_prefixes: tuple[str, ...] = (),
) -> Callable:
    """Cancel request after timeout_seconds (504 if no response started yet). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("path", "").startswith(exempt_prefixes):
            await app(scope, receive, send)
            return
        response_started = False

        async def tracking_send(message: dict) -> None:
            nonlocal response_started
            response_started = response_started or message["type"] == "http.response.start"
            await send(message)

        try:
            await asyncio.wait_for(app(scope, receive, tracking_send), float(timeout_seconds))
        except asyncio.TimeoutError:
            logger.warning(
                "%s %s cancelled after %ss",
                scope.get("method", ""),
                scope.get("path", ""),
                timeout_seconds,
            )
            if response_started:
                return
            timed_out = JSONResponse(
                f"Request timed out after {timeout_seconds} seconds", status_code=504
            )
            await timed_out(scope, receive, send)

    return asgi_app
