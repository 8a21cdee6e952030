"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See gateway.core.lifespan and
gateway.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gateway.api.v1 import api_router
from gateway.core.config import get_settings
from gateway.core.exception_handlers import register_exception_handlers
from gateway.core.lifespan import create_lifespan
from gateway.middleware import RequestIDMiddleware, TimeoutMiddleware
from gateway.shared.telemetry import setup_logging

# Proxied uploads run as long as the relay allows (UPLOAD_RELAY_TIMEOUT_SECONDS).
UPLOAD_PATH_PREFIXES = ("/upload/",)


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    # Last added is outermost: request ID, then timeout, then CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    app.add_middleware(
        TimeoutMiddleware,
        timeout_seconds=settings.request_timeout_seconds,
        exempt_prefixes=UPLOAD_PATH_PREFIXES,
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router)

    return app


app = create_app()
