"""DTOs for recipe use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class RecipeData:
    """Mutable recipe fields as supplied by a client (create or update)."""

    name: str
    tags: list[str] = field(default_factory=list)
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"{key} must be a list of strings")
    return list(value)


@dataclass(frozen=True)
class RecipeResult:
    """Recipe read-model (result of get, list, create, search)."""

    id: str
    name: str
    tags: list[str]
    ingredients: list[str]
    instructions: list[str]
    published_at: datetime

    def to_cache(self) -> dict[str, Any]:
        """JSON-ready dict for the cached list snapshot."""
        return {
            "id": self.id,
            "name": self.name,
            "tags": list(self.tags),
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "published_at": self.published_at.isoformat(),
        }

    @classmethod
    def from_cache(cls, data: dict[str, Any]) -> RecipeResult:
        """Inverse of to_cache. Raises KeyError/ValueError/TypeError on malformed input."""
        published_at = ensure_utc(datetime.fromisoformat(data["published_at"]))
        assert published_at is not None
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            tags=_string_list(data, "tags"),
            ingredients=_string_list(data, "ingredients"),
            instructions=_string_list(data, "instructions"),
            published_at=published_at,
        )
