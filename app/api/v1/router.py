"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, health, recipes
from app.core.config import Settings


def build_api_router(settings: Settings) -> APIRouter:
    """Assemble the routes; /refresh is only mounted for the jwt strategy."""
    api_router = APIRouter()
    api_router.include_router(health.router, tags=["health"])
    api_router.include_router(auth.router, tags=["auth"])
    if settings.auth_strategy == "jwt":
        api_router.include_router(auth.token_router, tags=["auth"])
    api_router.include_router(recipes.router, prefix="/recipes", tags=["recipes"])
    return api_router
