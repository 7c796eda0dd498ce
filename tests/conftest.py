"""Pytest configuration and fixtures for the recipes API.

HTTP tests run against a fresh app from app.main.create_app() using the memory
backend and an in-process fake Redis. DB-dependent fixtures need
TEST_DATABASE_URL (a postgresql+asyncpg URL) and skip otherwise.
All imports use app.*.
"""

import fnmatch
import os
import time
from collections.abc import AsyncIterator, Iterator
from contextlib import contextmanager

# Must be set before app.main is imported (it builds a module-level app).
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["DATABASE_BACKEND"] = "memory"
os.environ["REDIS_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["AUTH_STRATEGY"] = "jwt"
os.environ.pop("MEMORY_SEED_USERS", None)

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.application.services.seed_service import seed_users
from app.core.config import get_settings
from app.infrastructure.cache import CacheService
from app.infrastructure.memory import MemoryUserRepository
from app.main import create_app

TEST_USERNAME = "admin"
TEST_PASSWORD = "passadmin"


class FakeRedis:
    """In-process stand-in for redis.asyncio.Redis (get/set/delete/incr/ping/aclose only)."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.expirations: dict[str, float | None] = {}
        self.ttls: dict[str, int | None] = {}

    def _alive(self, key: str) -> bool:
        expires = self.expirations.get(key)
        if expires is not None and expires <= time.monotonic():
            self.store.pop(key, None)
            self.expirations.pop(key, None)
            self.ttls.pop(key, None)
        return key in self.store

    async def ping(self) -> bool:
        return True

    async def get(self, key: str) -> str | None:
        return self.store.get(key) if self._alive(key) else None

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.store[key] = value
        self.ttls[key] = ex
        self.expirations[key] = time.monotonic() + ex if ex is not None else None
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self._alive(key):
                removed += 1
            self.store.pop(key, None)
            self.expirations.pop(key, None)
            self.ttls.pop(key, None)
        return removed

    async def incr(self, key: str) -> int:
        current = int(self.store[key]) if self._alive(key) else 0
        self.store[key] = str(current + 1)
        self.ttls.setdefault(key, None)
        self.expirations.setdefault(key, None)
        return current + 1

    def keys_matching(self, pattern: str) -> list[str]:
        return [k for k in self.store if fnmatch.fnmatch(k, pattern) and self._alive(k)]

    async def aclose(self) -> None:
        return None


@contextmanager
def override_env(**values: str) -> Iterator[None]:
    """Set env vars and reload settings; restore both on exit."""
    previous = {k: os.environ.get(k) for k in values}
    os.environ.update(values)
    get_settings.cache_clear()
    try:
        yield
    finally:
        for k, v in previous.items():
            if v is None:
                os.environ.pop(k, None)
            else:
                os.environ[k] = v
        get_settings.cache_clear()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def cache(fake_redis: FakeRedis) -> CacheService:
    """CacheService wired to the fake Redis (treated as connected)."""
    return CacheService(redis_client=fake_redis, settings=get_settings())


async def _build_app(cache: CacheService | None) -> FastAPI:
    application = create_app()
    application.state.cache = cache
    await seed_users(
        MemoryUserRepository(application.state.memory_store),
        {TEST_USERNAME: TEST_PASSWORD},
    )
    return application


@pytest.fixture
async def app(cache: CacheService) -> FastAPI:
    """Fresh app (jwt strategy, memory backend) with one seeded user."""
    get_settings.cache_clear()
    return await _build_app(cache)


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Sign in as the seeded user; return headers for protected requests."""
    response = await client.post(
        "/signin", json={"username": TEST_USERNAME, "password": TEST_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": response.json()["token"]}


@pytest.fixture
async def session_client(cache: CacheService) -> AsyncIterator[AsyncClient]:
    """Client for an app running the session (cookie) strategy."""
    with override_env(AUTH_STRATEGY="session"):
        application = await _build_app(cache)
        transport = ASGITransport(app=application)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Database session for repository/integration tests. Rolls back after test.

    Requires TEST_DATABASE_URL (postgresql+asyncpg://...). Tables are created
    if missing. Skips when not configured; run without DB via:
    pytest -m 'not requires_db'.
    """
    url = os.environ.get("TEST_DATABASE_URL")
    if not url:
        pytest.skip("Postgres not configured: set TEST_DATABASE_URL")
    from app.infrastructure.persistence import models  # noqa: F401
    from app.infrastructure.persistence.database import Base

    engine = create_async_engine(url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()
    await engine.dispose()
