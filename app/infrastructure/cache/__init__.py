"""Cache: Redis service, session store and cache key utilities.

Used by the recipe service (list snapshot) and the session auth strategy.
CacheService uses app.core.config; key format is in keys.py (DRY).
"""

from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import recipes_list_key, session_key
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.cache.session_store import RedisSessionStore

__all__ = [
    "CacheProtocol",
    "CacheService",
    "RedisSessionStore",
    "recipes_list_key",
    "session_key",
]
