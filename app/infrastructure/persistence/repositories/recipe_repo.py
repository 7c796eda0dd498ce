"""Recipe repository (SQLAlchemy). Interface methods return application DTOs."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.recipe import RecipeData, RecipeResult
from app.infrastructure.exceptions import StorageException
from app.infrastructure.persistence.models.recipe import Recipe, RecipeTag
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _recipe_to_result(r: Recipe) -> RecipeResult:
    """Map ORM Recipe to application RecipeResult."""
    published_at = ensure_utc(r.published_at)
    assert published_at is not None
    return RecipeResult(
        id=r.id,
        name=r.name,
        tags=r.tags,
        ingredients=list(r.ingredients or []),
        instructions=list(r.instructions or []),
        published_at=published_at,
    )


def _build_tags(tags: list[str]) -> list[RecipeTag]:
    return [
        RecipeTag(position=i, value=tag, value_normalized=tag.lower())
        for i, tag in enumerate(tags)
    ]


class RecipeRepository(BaseRepository[Recipe]):
    """Recipe store on Postgres. Tag search uses the normalized tag index."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Recipe)

    async def list_all(self) -> list[RecipeResult]:
        try:
            result = await self.db.execute(
                select(Recipe).order_by(Recipe.published_at, Recipe.id)
            )
        except SQLAlchemyError as e:
            raise StorageException("Database read failed", reason=str(e)) from e
        return [_recipe_to_result(r) for r in result.scalars().all()]

    async def get_by_id(self, recipe_id: str) -> RecipeResult | None:
        recipe = await self.get_model(recipe_id)
        return _recipe_to_result(recipe) if recipe else None

    async def create(
        self, recipe_id: str, data: RecipeData, published_at: datetime
    ) -> RecipeResult:
        recipe = Recipe(
            id=recipe_id,
            name=data.name,
            ingredients=list(data.ingredients),
            instructions=list(data.instructions),
            published_at=published_at,
        )
        recipe.tags_rel = _build_tags(list(data.tags))
        try:
            await self.add(recipe)
        except SQLAlchemyError as e:
            raise StorageException("Failed to create recipe", reason=str(e)) from e
        return _recipe_to_result(recipe)

    async def update(self, recipe_id: str, data: RecipeData) -> RecipeResult | None:
        """Replace mutable fields. id and published_at are left alone."""
        recipe = await self.get_model(recipe_id)
        if recipe is None:
            return None
        recipe.name = data.name
        recipe.ingredients = list(data.ingredients)
        recipe.instructions = list(data.instructions)
        # Clear first so the (recipe_id, position) keys are free for the new rows
        recipe.tags_rel.clear()
        try:
            await self.db.flush()
            recipe.tags_rel.extend(_build_tags(list(data.tags)))
            await self.db.flush()
        except SQLAlchemyError as e:
            raise StorageException("Failed to update recipe", reason=str(e)) from e
        return _recipe_to_result(recipe)

    async def delete(self, recipe_id: str) -> bool:
        recipe = await self.get_model(recipe_id)
        if recipe is None:
            return False
        await self.remove(recipe)
        return True

    async def search_by_tag(self, tag: str) -> list[RecipeResult]:
        stmt = (
            select(Recipe)
            .where(Recipe.tags_rel.any(RecipeTag.value_normalized == tag.lower()))
            .order_by(Recipe.published_at, Recipe.id)
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageException("Database read failed", reason=str(e)) from e
        return [_recipe_to_result(r) for r in result.scalars().all()]
