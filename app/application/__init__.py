"""Application layer: DTOs, interfaces, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, cache, sessions, tokens).
"""

from app.application.interfaces import (
    ICacheService,
    IRecipeRepository,
    ISessionStore,
    ITokenService,
    IUserRepository,
)
from app.application.services import AuthService, RecipeService

__all__ = [
    "AuthService",
    "ICacheService",
    "IRecipeRepository",
    "ISessionStore",
    "ITokenService",
    "IUserRepository",
    "RecipeService",
]
