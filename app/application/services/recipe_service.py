"""Recipe application service: CRUD and tag search with a cached list snapshot.

The full recipe list is cached under one key with no expiry. Every successful
write commits first, then bumps a generation counter and deletes that key.
A snapshot records the generation it was built under and only counts as a hit
while the counter still matches, so a rebuild that raced a write is ignored.
"""

from __future__ import annotations

import logging

from app.application.dtos.recipe import RecipeData, RecipeResult
from app.application.interfaces.repositories import IRecipeRepository
from app.application.interfaces.services import ICacheService
from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_SUFFIX_GENERATION,
    SNAPSHOT_FIELD_GENERATION,
    SNAPSHOT_FIELD_RECIPES,
)
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

RESOURCE_RECIPE = "recipe"


def _validate(data: RecipeData) -> None:
    if not data.name or not data.name.strip():
        raise ValidationException("Recipe name must not be empty", field="name")


class RecipeService:
    """Create, list, get, update, delete and search recipes."""

    def __init__(
        self,
        recipe_repo: IRecipeRepository,
        cache: ICacheService | None = None,
        cache_key: str = "recipes",
    ) -> None:
        self._recipes = recipe_repo
        self._cache = cache
        self._cache_key = cache_key
        self._generation_key = f"{cache_key}{CACHE_KEY_SEP}{CACHE_SUFFIX_GENERATION}"

    async def create_recipe(self, data: RecipeData) -> str:
        """Persist a new recipe with a fresh id and publish time; return the id."""
        _validate(data)
        recipe_id = generate_cuid()
        created = await self._recipes.create(recipe_id, data, utc_now())
        await self._recipes.commit()
        await self._invalidate_list()
        return created.id

    async def list_recipes(self) -> list[RecipeResult]:
        """Return all recipes from the cached snapshot, rebuilding it on a miss."""
        if self._cache is None:
            return await self._recipes.list_all()
        # Read before the store so a write landing mid-rebuild outdates the snapshot
        generation = await self._current_generation()
        cached = await self._read_cached_list(generation)
        if cached is not None:
            return cached
        logger.debug("Recipe list cache miss; reading store")
        recipes = await self._recipes.list_all()
        await self._cache.set(
            self._cache_key,
            {
                SNAPSHOT_FIELD_GENERATION: generation,
                SNAPSHOT_FIELD_RECIPES: [r.to_cache() for r in recipes],
            },
            ttl=None,
        )
        return recipes

    async def get_recipe(self, recipe_id: str) -> RecipeResult:
        """Return one recipe. Raises ResourceNotFoundException if unknown."""
        recipe = await self._recipes.get_by_id(recipe_id)
        if recipe is None:
            raise ResourceNotFoundException(RESOURCE_RECIPE, recipe_id)
        return recipe

    async def update_recipe(self, recipe_id: str, data: RecipeData) -> RecipeResult:
        """Replace mutable fields; id and published_at never change."""
        _validate(data)
        updated = await self._recipes.update(recipe_id, data)
        if updated is None:
            raise ResourceNotFoundException(RESOURCE_RECIPE, recipe_id)
        await self._recipes.commit()
        await self._invalidate_list()
        return updated

    async def delete_recipe(self, recipe_id: str) -> None:
        """Delete a recipe. Raises ResourceNotFoundException if unknown."""
        deleted = await self._recipes.delete(recipe_id)
        if not deleted:
            raise ResourceNotFoundException(RESOURCE_RECIPE, recipe_id)
        await self._recipes.commit()
        await self._invalidate_list()

    async def search_by_tag(self, tag: str) -> list[RecipeResult]:
        """Recipes carrying tag (case-insensitive exact match). Blank tag gives []."""
        tag = (tag or "").strip()
        if not tag:
            return []
        return await self._recipes.search_by_tag(tag)

    async def _current_generation(self) -> int:
        assert self._cache is not None
        value = await self._cache.get(self._generation_key)
        return value if isinstance(value, int) else 0

    async def _read_cached_list(self, generation: int) -> list[RecipeResult] | None:
        assert self._cache is not None
        raw = await self._cache.get(self._cache_key)
        if not isinstance(raw, dict):
            return None
        if raw.get(SNAPSHOT_FIELD_GENERATION) != generation:
            logger.debug("Recipe list snapshot is from an older generation")
            return None
        items = raw.get(SNAPSHOT_FIELD_RECIPES)
        try:
            if not isinstance(items, list):
                raise TypeError("recipes must be a list")
            recipes = [RecipeResult.from_cache(item) for item in items]
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed recipe list snapshot")
            await self._cache.delete(self._cache_key)
            return None
        logger.debug("Recipe list served from cache (%d recipes)", len(recipes))
        return recipes

    async def _invalidate_list(self) -> None:
        if self._cache is None:
            return
        await self._cache.incr(self._generation_key)
        if await self._cache.delete(self._cache_key):
            logger.info("Recipe list cache invalidated")
