"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services used by application
services (DIP): cache, session store, token codec.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.auth import SessionData


class ICacheService(Protocol):
    """Key/value cache with JSON values; degrades to misses when unavailable."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value with optional TTL (None = no expiry)."""

    async def delete(self, key: str) -> bool:
        """Remove key."""

    async def incr(self, key: str) -> int | None:
        """Atomically increment an integer counter; None when unavailable."""


class ISessionStore(Protocol):
    """Server-side session records keyed by session id."""

    async def save(self, session_id: str, data: SessionData) -> None:
        """Store session data; raise StorageException when it cannot be stored."""

    async def load(self, session_id: str) -> SessionData | None:
        """Return session data or None."""

    async def clear(self, session_id: str) -> None:
        """Remove session (no-op when absent)."""


class ITokenService(Protocol):
    """Signed, expiring access tokens."""

    def create_access_token(
        self, data: dict[str, Any], expires_delta: timedelta
    ) -> tuple[str, datetime]:
        """Return (token, expiry)."""

    def verify_token(self, token: str) -> dict[str, Any]:
        """Return claims; raise ValueError on malformed, badly signed or expired token."""

    @staticmethod
    def expires_at(payload: dict[str, Any]) -> datetime:
        """Expiry of decoded claims."""
