"""DTOs for authentication (tokens, principals, sessions)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class IssuedToken:
    """A signed access token and its expiry instant."""

    token: str
    expires: datetime


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""

    username: str


@dataclass(frozen=True)
class SessionData:
    """What the session store keeps per session id."""

    username: str
    token: str


@dataclass(frozen=True)
class SessionLogin:
    """Result of a session sign-in: the id to put in the cookie."""

    session_id: str
    username: str
