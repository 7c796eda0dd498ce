"""Memory backend: process-local recipe and user stores (DATABASE_BACKEND=memory)."""

from app.infrastructure.memory.recipe_repo import MemoryRecipeRepository
from app.infrastructure.memory.store import MemoryStore, StoredUser
from app.infrastructure.memory.user_repo import MemoryUserRepository

__all__ = [
    "MemoryRecipeRepository",
    "MemoryStore",
    "MemoryUserRepository",
    "StoredUser",
]
