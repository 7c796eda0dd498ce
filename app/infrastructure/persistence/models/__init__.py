"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from app.infrastructure.persistence.models.recipe import Recipe, RecipeTag
from app.infrastructure.persistence.models.user import User

__all__ = [
    "CuidMixin",
    "Recipe",
    "RecipeTag",
    "TimestampMixin",
    "User",
]
