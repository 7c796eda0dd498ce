"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Postgres (SQLAlchemy) and memory implementations both satisfy them.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.recipe import RecipeData, RecipeResult
    from app.application.dtos.user import CredentialRecord, UserResult


class IRecipeRepository(Protocol):
    """Protocol for the recipe store."""

    async def list_all(self) -> list[RecipeResult]:
        """Return every recipe, oldest first."""

    async def get_by_id(self, recipe_id: str) -> RecipeResult | None:
        """Return recipe by ID, or None."""

    async def create(
        self, recipe_id: str, data: RecipeData, published_at: datetime
    ) -> RecipeResult:
        """Persist a new recipe with the given id and publish time."""

    async def update(self, recipe_id: str, data: RecipeData) -> RecipeResult | None:
        """Replace name, tags, ingredients and instructions. None if no such recipe."""

    async def delete(self, recipe_id: str) -> bool:
        """Delete the recipe. False if no such recipe."""

    async def search_by_tag(self, tag: str) -> list[RecipeResult]:
        """Recipes with a tag equal to tag, case-insensitively."""

    async def commit(self) -> None:
        """Make pending writes durable (no-op for stores without transactions)."""


class IUserRepository(Protocol):
    """Protocol for the credential store."""

    async def get_credential(self, username: str) -> CredentialRecord | None:
        """Return the stored credential for username, or None."""

    async def create_user(self, username: str, password: str) -> UserResult:
        """Hash password and store a new user; raise UserAlreadyExistsException on duplicate."""
