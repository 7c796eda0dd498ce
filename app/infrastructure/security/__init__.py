"""Security: JWT and password hashing."""

from app.infrastructure.security.jwt import JWTService
from app.infrastructure.security.password import (
    get_password_hash,
    get_password_hash_async,
    verify_password,
    verify_password_async,
)

__all__ = [
    "JWTService",
    "get_password_hash",
    "get_password_hash_async",
    "verify_password",
    "verify_password_async",
]
