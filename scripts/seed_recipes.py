"""Bulk insert recipes from a JSON array into the Postgres recipe store.

Usage:
    python -m scripts.seed_recipes <recipes.json>
Each element needs a name; tags, ingredients and instructions are optional.
Ids and publishedAt in the file are ignored: new ones are assigned.
"""

import asyncio
import json
import sys
from pathlib import Path

from app.application.services.recipe_service import RecipeService
from app.application.services.seed_service import seed_recipes
from app.core.config import get_settings
from app.domain.exceptions import ValidationException
from app.infrastructure.cache import CacheService, recipes_list_key
from app.infrastructure.persistence import database
from app.infrastructure.persistence.repositories import RecipeRepository
from app.shared.telemetry import setup_logging


def _load(path: Path) -> list[dict]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of recipes")
    return data


async def main() -> None:
    """Insert every recipe in the file, then drop the cached list."""
    if len(sys.argv) != 2:
        print("Usage: python -m scripts.seed_recipes <recipes.json>", file=sys.stderr)
        sys.exit(1)
    try:
        items = _load(Path(sys.argv[1]))
    except (OSError, ValueError) as e:
        print(f"Cannot read recipes: {e}", file=sys.stderr)
        sys.exit(1)

    settings = get_settings()
    setup_logging()
    if settings.database_backend != "postgres":
        print("DATABASE_BACKEND must be 'postgres' to seed recipes", file=sys.stderr)
        sys.exit(1)
    if settings.database_create_tables:
        await database.create_tables()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    cache = None
    if settings.redis_enabled:
        cache = CacheService(settings=settings)
        await cache.connect()
    try:
        async with database.AsyncSessionLocal() as session:
            service = RecipeService(
                RecipeRepository(session),
                cache=cache,
                cache_key=recipes_list_key(settings.recipes_cache_key),
            )
            ids = await seed_recipes(service, items)
    except ValidationException as e:
        print(f"Invalid recipe: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        if cache is not None:
            await cache.disconnect()
        await database.dispose_engine()
    print(f"Inserted {len(ids)} recipe(s)")


if __name__ == "__main__":
    asyncio.run(main())
