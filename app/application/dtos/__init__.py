"""Application DTOs (no ORM dependency)."""

from app.application.dtos.auth import IssuedToken, Principal, SessionData, SessionLogin
from app.application.dtos.recipe import RecipeData, RecipeResult
from app.application.dtos.user import CredentialRecord, UserResult

__all__ = [
    "CredentialRecord",
    "IssuedToken",
    "Principal",
    "RecipeData",
    "RecipeResult",
    "SessionData",
    "SessionLogin",
    "UserResult",
]
