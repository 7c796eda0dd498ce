"""HTTP API: routers, endpoints and dependencies."""

from app.api.v1.router import build_api_router

__all__ = ["build_api_router"]
