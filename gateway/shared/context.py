"""Request context management using contextvars.

Holds the request ID for the current request so log records emitted
anywhere below the middleware can carry it.
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token:
    """Bind request_id to the current task. Returns a token for reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    """Restore the previous request ID."""
    _request_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request ID or None outside a request."""
    return _request_id.get()
