"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for repositories, services and the current caller.
Routes depend only on these dependencies, not on infrastructure directly.

When database_backend is 'postgres', repositories use SQLAlchemy.
When database_backend is 'memory', they use the process-local MemoryStore on
app.state. Switch backends via DATABASE_BACKEND in config.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.auth import Principal
from app.application.interfaces.repositories import IRecipeRepository, IUserRepository
from app.application.interfaces.services import ICacheService, ISessionStore, ITokenService
from app.application.services.auth_service import AuthService
from app.application.services.recipe_service import RecipeService
from app.core.config import get_settings
from app.infrastructure.cache import RedisSessionStore, recipes_list_key
from app.infrastructure.memory import (
    MemoryRecipeRepository,
    MemoryStore,
    MemoryUserRepository,
)
from app.infrastructure.persistence.database import get_db
from app.infrastructure.persistence.repositories import RecipeRepository, UserRepository
from app.shared.context import set_current_username

# Raw token in Authorization; "Bearer <token>" is accepted too.
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)

BEARER_PREFIX = "bearer "


def extract_token(header_value: str | None) -> str | None:
    """Return the token from an Authorization header value, stripping a Bearer prefix."""
    if not header_value:
        return None
    value = header_value.strip()
    if value.lower().startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX) :].strip()
    return value or None


@dataclass
class DbOrMemory:
    """Either a Postgres session or the memory store for swappable backends."""

    db: AsyncSession | None
    memory: MemoryStore | None


async def _get_db_or_memory(request: Request) -> AsyncGenerator[DbOrMemory, None]:
    """Yield DB session or the memory store based on config."""
    settings = get_settings()
    if settings.database_backend == "postgres":
        async for session in get_db():
            yield DbOrMemory(db=session, memory=None)
    else:
        yield DbOrMemory(db=None, memory=request.app.state.memory_store)


async def get_recipe_repo(
    backend: Annotated[DbOrMemory, Depends(_get_db_or_memory)],
) -> IRecipeRepository:
    """Recipe repository (Postgres or memory from config)."""
    if backend.db is not None:
        return RecipeRepository(backend.db)
    assert backend.memory is not None
    return MemoryRecipeRepository(backend.memory)


async def get_user_repo(
    backend: Annotated[DbOrMemory, Depends(_get_db_or_memory)],
) -> IUserRepository:
    """User repository (Postgres or memory from config)."""
    if backend.db is not None:
        return UserRepository(backend.db)
    assert backend.memory is not None
    return MemoryUserRepository(backend.memory)


def get_cache(request: Request) -> ICacheService | None:
    """Shared cache service from app.state (None when never configured)."""
    return getattr(request.app.state, "cache", None)


def get_token_service(request: Request) -> ITokenService:
    """JWT codec built once in create_app."""
    return request.app.state.token_service


def get_session_store(request: Request) -> ISessionStore | None:
    """Session store over the shared cache (session strategy only)."""
    settings = get_settings()
    if settings.auth_strategy != "session":
        return None
    return RedisSessionStore(get_cache(request), settings.session_ttl_seconds)


async def get_recipe_service(
    recipe_repo: Annotated[IRecipeRepository, Depends(get_recipe_repo)],
    cache: Annotated[ICacheService | None, Depends(get_cache)],
) -> RecipeService:
    """Recipe service with the list cache."""
    cache_key = recipes_list_key(get_settings().recipes_cache_key)
    return RecipeService(recipe_repo, cache=cache, cache_key=cache_key)


async def get_auth_service(
    user_repo: Annotated[IUserRepository, Depends(get_user_repo)],
    token_service: Annotated[ITokenService, Depends(get_token_service)],
    session_store: Annotated[ISessionStore | None, Depends(get_session_store)],
) -> AuthService:
    """Auth service with lifetimes from settings."""
    return AuthService.from_settings(
        get_settings(), user_repo, token_service, session_store=session_store
    )


async def get_current_principal(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    authorization: Annotated[str | None, Depends(authorization_header)],
) -> Principal:
    """Resolve the caller per AUTH_STRATEGY; raise before any protected logic runs.

    jwt: Authorization header, 401 when missing or invalid.
    session: session cookie, 403 when there is no session.
    """
    settings = get_settings()
    if settings.auth_strategy == "session":
        session_id = request.cookies.get(settings.session_cookie_name)
        principal = await auth_service.authenticate_session(session_id)
    else:
        principal = auth_service.authenticate(extract_token(authorization))
    set_current_username(principal.username)
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
