"""In-memory recipe repository. Same contract as the SQLAlchemy RecipeRepository."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from app.application.dtos.recipe import RecipeData, RecipeResult
from app.infrastructure.memory.store import MemoryStore


def _copy(r: RecipeResult) -> RecipeResult:
    """Detach list fields so callers cannot mutate stored state."""
    return replace(
        r,
        tags=list(r.tags),
        ingredients=list(r.ingredients),
        instructions=list(r.instructions),
    )


class MemoryRecipeRepository:
    """Recipe store held in a MemoryStore. Writes are visible immediately; commit is a no-op."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def list_all(self) -> list[RecipeResult]:
        async with self._store.lock:
            return [_copy(r) for r in self._store.recipes.values()]

    async def get_by_id(self, recipe_id: str) -> RecipeResult | None:
        async with self._store.lock:
            recipe = self._store.recipes.get(recipe_id)
            return _copy(recipe) if recipe else None

    async def create(
        self, recipe_id: str, data: RecipeData, published_at: datetime
    ) -> RecipeResult:
        recipe = RecipeResult(
            id=recipe_id,
            name=data.name,
            tags=list(data.tags),
            ingredients=list(data.ingredients),
            instructions=list(data.instructions),
            published_at=published_at,
        )
        async with self._store.lock:
            self._store.recipes[recipe_id] = recipe
        return _copy(recipe)

    async def update(self, recipe_id: str, data: RecipeData) -> RecipeResult | None:
        async with self._store.lock:
            current = self._store.recipes.get(recipe_id)
            if current is None:
                return None
            updated = replace(
                current,
                name=data.name,
                tags=list(data.tags),
                ingredients=list(data.ingredients),
                instructions=list(data.instructions),
            )
            self._store.recipes[recipe_id] = updated
        return _copy(updated)

    async def delete(self, recipe_id: str) -> bool:
        async with self._store.lock:
            return self._store.recipes.pop(recipe_id, None) is not None

    async def search_by_tag(self, tag: str) -> list[RecipeResult]:
        wanted = tag.lower()
        async with self._store.lock:
            return [
                _copy(r)
                for r in self._store.recipes.values()
                if any(t.lower() == wanted for t in r.tags)
            ]

    async def commit(self) -> None:
        return None
