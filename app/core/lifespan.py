"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (cache, schema,
seed users, telemetry, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: Redis cache (if enabled and not injected), schema create
    (postgres + DATABASE_CREATE_TABLES), memory seed users, SQL/Redis
    instrumentation (if telemetry is on). Shutdown order: cache disconnect,
    telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    if settings.redis_enabled and getattr(app.state, "cache", None) is None:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache

    if settings.database_backend == "postgres" and settings.database_create_tables:
        from app.infrastructure.persistence.database import create_tables

        await create_tables()

    seed = settings.parsed_seed_users()
    if settings.database_backend == "memory" and seed:
        from app.application.services.seed_service import seed_users
        from app.infrastructure.memory import MemoryUserRepository

        await seed_users(MemoryUserRepository(app.state.memory_store), seed)

    from app.shared.telemetry.telemetry import get_telemetry

    telemetry = get_telemetry()
    if telemetry is not None:
        if settings.redis_enabled:
            telemetry.instrument_redis()
        if settings.database_backend == "postgres":
            from app.infrastructure.persistence.database import get_engine

            telemetry.instrument_sqlalchemy(get_engine())

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()

    from app.infrastructure.persistence import database

    if database.engine is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
