"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a fixed-length
input so long passwords are not silently truncated.

bcrypt is CPU-bound: async callers use verify_password_async / get_password_hash_async,
which run it in a worker thread.
"""

import asyncio
import base64
import hashlib

import bcrypt

# Lazy dummy hash for comparison when the user is not found (timing-attack mitigation).
_dummy_hash_cache: str | None = None


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password."""
    try:
        result = bcrypt.checkpw(
            _prehash(plain_password),
            hashed_password.encode("utf-8"),
        )
        return bool(result)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(_prehash(password), salt)
    return hashed.decode("utf-8")


async def get_password_hash_async(password: str) -> str:
    """get_password_hash in a worker thread."""
    return await asyncio.to_thread(get_password_hash, password)


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await get_password_hash_async("not-a-real-password")
    return _dummy_hash_cache


async def verify_password_async(
    plain_password: str, hashed_password: str | None
) -> bool:
    """Verify in a worker thread. With no stored hash, still burn one bcrypt round and return False."""
    if hashed_password is None:
        dummy = await _get_dummy_hash()
        await asyncio.to_thread(verify_password, plain_password, dummy)
        return False
    return await asyncio.to_thread(verify_password, plain_password, hashed_password)
