"""API v1 router aggregation.

Object routes are mounted at the root to keep the paths clients of the
gateway already use. All routes use dependencies from
gateway.api.v1.dependencies (no manual storage construction).
"""

from fastapi import APIRouter

from gateway.api.v1.endpoints import health, objects

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(objects.router, tags=["objects"])
