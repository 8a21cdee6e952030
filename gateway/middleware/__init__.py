"""HTTP middleware: timeout and request ID.

Applied in create_app(); the last one added runs outermost.
"""

from gateway.middleware.request_id import RequestIDMiddleware
from gateway.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
