"""Authentication service: credential checks, JWT issue/refresh/verify, sessions.

Two strategies are offered and a running app uses exactly one of them:
stateless tokens (sign_in / refresh / authenticate) or server-side sessions
(sign_in_session / sign_out / authenticate_session).
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from app.application.dtos.auth import IssuedToken, Principal, SessionData, SessionLogin
from app.application.interfaces.repositories import IUserRepository
from app.application.interfaces.services import ISessionStore, ITokenService
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BadRequestException,
)
from app.infrastructure.security.password import verify_password_async
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid, generate_session_id

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class AuthService:
    """Verify credentials and issue, refresh and validate credentials of either strategy."""

    def __init__(
        self,
        user_repo: IUserRepository,
        token_service: ITokenService,
        *,
        access_ttl: timedelta = timedelta(minutes=10),
        refresh_ttl: timedelta = timedelta(minutes=5),
        refresh_window: timedelta = timedelta(seconds=30),
        session_store: ISessionStore | None = None,
    ) -> None:
        self._users = user_repo
        self._tokens = token_service
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl
        self._refresh_window = refresh_window
        self._sessions = session_store

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        user_repo: IUserRepository,
        token_service: ITokenService,
        session_store: ISessionStore | None = None,
    ) -> AuthService:
        """Build with lifetimes taken from settings."""
        return cls(
            user_repo,
            token_service,
            access_ttl=timedelta(minutes=settings.access_token_expire_minutes),
            refresh_ttl=timedelta(minutes=settings.refresh_token_expire_minutes),
            refresh_window=timedelta(seconds=settings.refresh_window_seconds),
            session_store=session_store,
        )

    async def _verify_credentials(self, username: str, password: str) -> str:
        """Return the username if the password matches; otherwise raise AuthenticationException."""
        credential = await self._users.get_credential(username) if username else None
        hashed = credential.hashed_password if credential else None
        if not await verify_password_async(password, hashed) or credential is None:
            logger.info("Failed sign-in for user %r", username)
            raise AuthenticationException(INVALID_CREDENTIALS)
        return credential.username

    # ---- Token strategy ----

    async def sign_in(self, username: str, password: str) -> IssuedToken:
        """Check credentials and issue an access token."""
        verified = await self._verify_credentials(username, password)
        token, expires = self._tokens.create_access_token(
            {"sub": verified, "username": verified},
            expires_delta=self._access_ttl,
        )
        logger.info("User %s signed in (token expires %s)", verified, expires.isoformat())
        return IssuedToken(token=token, expires=expires)

    def authenticate(self, token: str | None) -> Principal:
        """Validate signature and expiry; return the caller."""
        try:
            payload = self._tokens.verify_token(token or "")
        except ValueError as e:
            raise AuthenticationException(str(e)) from e
        return Principal(username=str(payload.get("username") or payload["sub"]))

    def refresh(self, token: str | None) -> IssuedToken:
        """Re-sign a valid token that is within the refresh window of its expiry.

        Raises AuthenticationException for a missing, malformed, badly signed
        or expired token and BadRequestException when more than the refresh
        window remains.
        """
        try:
            payload = self._tokens.verify_token(token or "")
        except ValueError as e:
            raise AuthenticationException(str(e)) from e
        remaining = self._tokens.expires_at(payload) - utc_now()
        if remaining > self._refresh_window:
            raise BadRequestException("Token is not expired yet")
        claims = {k: v for k, v in payload.items() if k != "exp"}
        new_token, expires = self._tokens.create_access_token(
            claims, expires_delta=self._refresh_ttl
        )
        return IssuedToken(token=new_token, expires=expires)

    # ---- Session strategy ----

    def _require_sessions(self) -> ISessionStore:
        if self._sessions is None:
            raise RuntimeError("Session store is not configured")
        return self._sessions

    async def sign_in_session(self, username: str, password: str) -> SessionLogin:
        """Check credentials and store a fresh opaque token in a new session."""
        sessions = self._require_sessions()
        verified = await self._verify_credentials(username, password)
        session_id = generate_session_id()
        await sessions.save(session_id, SessionData(username=verified, token=generate_cuid()))
        return SessionLogin(session_id=session_id, username=verified)

    async def sign_out(self, session_id: str | None) -> None:
        """Clear the session, if any."""
        if session_id and self._sessions is not None:
            await self._sessions.clear(session_id)

    async def authenticate_session(self, session_id: str | None) -> Principal:
        """Return the session's user; AuthorizationException when there is no session token."""
        sessions = self._require_sessions()
        data = await sessions.load(session_id) if session_id else None
        if data is None or not data.token:
            raise AuthorizationException("Not logged in")
        return Principal(username=data.username)
