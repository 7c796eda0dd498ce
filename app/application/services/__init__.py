"""Application services: authentication, recipes and seeding."""

from app.application.services.auth_service import AuthService
from app.application.services.recipe_service import RecipeService
from app.application.services.seed_service import (
    DEFAULT_USERS,
    recipe_data_from_json,
    seed_recipes,
    seed_users,
)

__all__ = [
    "DEFAULT_USERS",
    "AuthService",
    "RecipeService",
    "recipe_data_from_json",
    "seed_recipes",
    "seed_users",
]
