"""ID and value generators (CUID for records, opaque session ids)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

# 32 random bytes, URL-safe base64 (43 chars); safe for cookies and cache keys.
SESSION_ID_BYTES = 32


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_session_id() -> str:
    """Return an unguessable session identifier for the session cookie."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)
