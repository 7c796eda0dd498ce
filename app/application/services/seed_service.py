"""Seeding helpers shared by the startup hook (memory backend) and the seed scripts."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from app.application.dtos.recipe import RecipeData
from app.application.interfaces.repositories import IUserRepository
from app.application.services.recipe_service import RecipeService
from app.domain.exceptions import UserAlreadyExistsException, ValidationException

logger = logging.getLogger(__name__)

DEFAULT_USERS: dict[str, str] = {
    "admin": "passadmin",
    "khhini": "passkhhini",
}


async def seed_users(user_repo: IUserRepository, users: Mapping[str, str]) -> list[str]:
    """Create each user; existing usernames are skipped. Returns the usernames created."""
    created: list[str] = []
    for username, password in users.items():
        try:
            await user_repo.create_user(username, password)
        except UserAlreadyExistsException:
            logger.info("User %s already exists; skipped", username)
            continue
        created.append(username)
    if created:
        logger.info("Seeded users: %s", ", ".join(created))
    return created


def recipe_data_from_json(item: Mapping[str, Any]) -> RecipeData:
    """Build RecipeData from a JSON object; id and publishedAt, if present, are ignored."""
    name = item.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationException("Recipe name must not be empty", field="name")
    return RecipeData(
        name=name,
        tags=[str(t) for t in item.get("tags") or []],
        ingredients=[str(i) for i in item.get("ingredients") or []],
        instructions=[str(i) for i in item.get("instructions") or []],
    )


async def seed_recipes(
    recipe_service: RecipeService, items: Iterable[Mapping[str, Any]]
) -> list[str]:
    """Insert recipes through the service (fresh ids, current time). Returns the new ids."""
    ids = [
        await recipe_service.create_recipe(recipe_data_from_json(item))
        for item in items
    ]
    logger.info("Seeded %d recipes", len(ids))
    return ids
