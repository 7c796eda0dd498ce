"""Server-side session store on top of the cache backend.

A session is {"username": ..., "token": ...} under session:<session_id>, with the
key TTL as its lifetime. The cookie carries only the session id.
"""

from __future__ import annotations

import logging

from app.application.dtos.auth import SessionData
from app.core.constants import SESSION_FIELD_TOKEN, SESSION_FIELD_USERNAME
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import session_key
from app.infrastructure.exceptions import StorageException

logger = logging.getLogger(__name__)


class RedisSessionStore:
    """Save, load and clear sessions. Implements ISessionStore."""

    def __init__(self, cache: CacheProtocol | None, ttl_seconds: int) -> None:
        self._cache = cache
        self._ttl = ttl_seconds

    async def save(self, session_id: str, data: SessionData) -> None:
        """Store the session; raise StorageException if the backend refuses it."""
        stored = False
        if self._cache is not None:
            stored = await self._cache.set(
                session_key(session_id),
                {
                    SESSION_FIELD_USERNAME: data.username,
                    SESSION_FIELD_TOKEN: data.token,
                },
                ttl=self._ttl,
            )
        if not stored:
            raise StorageException(
                "Session store unavailable", reason="cache backend refused the session"
            )
        logger.info("Session created for user %s", data.username)

    async def load(self, session_id: str) -> SessionData | None:
        """Return the session, or None when absent, expired or unreadable."""
        if self._cache is None or not session_id:
            return None
        try:
            raw = await self._cache.get(session_key(session_id))
        except ValueError:
            return None
        if not isinstance(raw, dict):
            return None
        username = raw.get(SESSION_FIELD_USERNAME)
        token = raw.get(SESSION_FIELD_TOKEN)
        if not username or not token:
            return None
        return SessionData(username=str(username), token=str(token))

    async def clear(self, session_id: str) -> None:
        """Remove the session; missing sessions are ignored."""
        if self._cache is None or not session_id:
            return
        try:
            await self._cache.delete(session_key(session_id))
        except ValueError:
            return
