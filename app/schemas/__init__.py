"""Pydantic request/response schemas for the API."""

from app.schemas.auth import SignInRequest, TokenResponse
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.health import PingResponse
from app.schemas.recipe import RecipeCreatedResponse, RecipeRequest, RecipeResponse

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "PingResponse",
    "RecipeCreatedResponse",
    "RecipeRequest",
    "RecipeResponse",
    "SignInRequest",
    "TokenResponse",
]
