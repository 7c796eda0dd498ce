"""Request context management using contextvars.

Async-safe storage for request-scoped data: the request and correlation ids
(set by middleware) and the authenticated username (set by the auth
dependency). Read by the logging filter so every log line of a request
carries its ids.

Usage:
    set_request_ids(request_id="abc", correlation_id="abc")
    set_current_username("admin")
    ctx = get_request_context()
"""

from contextvars import ContextVar
from dataclasses import dataclass

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_current_username: ContextVar[str | None] = ContextVar(
    "current_username", default=None
)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    request_id: str | None
    correlation_id: str | None
    username: str | None


def set_request_id(request_id: str | None) -> None:
    _request_id.set(request_id)


def set_correlation_id(correlation_id: str | None) -> None:
    _correlation_id.set(correlation_id)


def set_current_username(username: str | None) -> None:
    """Record the authenticated caller for this request."""
    _current_username.set(username)


def get_request_id() -> str | None:
    return _request_id.get()


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def get_current_username() -> str | None:
    """Return the authenticated username, or None on public routes."""
    return _current_username.get()


def get_request_context() -> RequestContext:
    """Return a snapshot of the current request context."""
    return RequestContext(
        request_id=_request_id.get(),
        correlation_id=_correlation_id.get(),
        username=_current_username.get(),
    )
