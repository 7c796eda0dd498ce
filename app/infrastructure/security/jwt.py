"""JWT token creation and verification for authentication.

The secret and algorithm are injected at construction (see JWTService.from_settings);
nothing here reads the environment at call time.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, cast

from jose import JWTError, jwt

from app.shared.utils.datetime import from_timestamp_utc, utc_now

if TYPE_CHECKING:
    from app.core.config import Settings


class JWTService:
    """Sign and verify HS256 (by default) access tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> JWTService:
        """Build from application settings (secret_key, algorithm)."""
        return cls(settings.secret_key.get_secret_value(), settings.algorithm)

    def create_access_token(
        self,
        data: dict[str, Any],
        expires_delta: timedelta,
    ) -> tuple[str, datetime]:
        """Create a JWT with the given claims, expiring expires_delta from now.

        Args:
            data: Claims to encode (e.g. sub, username). Any exp is replaced.
            expires_delta: Time-to-live of the token.

        Returns:
            (encoded JWT, expiry instant). The instant is truncated to whole
            seconds so it equals the exp claim.
        """
        expire = (utc_now() + expires_delta).replace(microsecond=0)
        to_encode = data.copy()
        to_encode["exp"] = expire
        encoded = jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)
        return cast(str, encoded), expire

    def verify_token(self, token: str) -> dict[str, Any]:
        """Verify and decode a JWT. Returns the payload.

        Enforces presence of exp and sub. Raises ValueError if the token is
        malformed, badly signed, expired, or missing required claims.

        Args:
            token: JWT string (e.g. from Authorization header).

        Returns:
            Decoded payload dict.
        """
        if not token:
            raise ValueError("Token is missing")
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except JWTError as e:
            raise ValueError(str(e) or "Invalid token") from e
        if "sub" not in payload:
            raise ValueError("Token missing required claim: sub")
        return payload

    @staticmethod
    def expires_at(payload: dict[str, Any]) -> datetime:
        """Expiry instant of a decoded payload (exp is seconds since epoch)."""
        return from_timestamp_utc(float(payload["exp"]))
