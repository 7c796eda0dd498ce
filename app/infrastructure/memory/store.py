"""Process-local store backing the memory repositories.

Held on app.state (created in create_app). All mutation goes through the
store's asyncio.Lock; readers take a snapshot under the lock.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from app.application.dtos.recipe import RecipeResult


@dataclass
class StoredUser:
    id: str
    username: str
    hashed_password: str


@dataclass
class MemoryStore:
    """Recipes keyed by id (insertion order = publish order) and users keyed by username."""

    recipes: dict[str, RecipeResult] = field(default_factory=dict)
    users: dict[str, StoredUser] = field(default_factory=dict)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def clear(self) -> None:
        async with self.lock:
            self.recipes.clear()
            self.users.clear()
