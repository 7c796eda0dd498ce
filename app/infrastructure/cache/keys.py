"""Cache key builders. Single place for key format (DRY).

Key components must not contain CACHE_KEY_SEP to avoid ambiguous or
colliding keys.
"""

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_SESSION


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def recipes_list_key(base: str) -> str:
    """Cache key for the full recipe list snapshot (configured name, e.g. 'recipes')."""
    _validate_key_component(base, "recipes_cache_key")
    return base


def session_key(session_id: str) -> str:
    """Cache key for a server-side session record."""
    _validate_key_component(session_id, "session_id")
    return f"{CACHE_PREFIX_SESSION}{CACHE_KEY_SEP}{session_id}"
