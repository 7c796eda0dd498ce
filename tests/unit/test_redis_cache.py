"""CacheService against a fake Redis client, and cache key builders."""

import pytest
import redis.asyncio as redis

from app.infrastructure.cache import CacheService, recipes_list_key, session_key
from tests.conftest import FakeRedis


class FailingRedis(FakeRedis):
    """Every command fails with a non-connection Redis error."""

    async def get(self, key: str):
        raise redis.ResponseError("boom")

    async def set(self, key: str, value: str, ex: int | None = None):
        raise redis.ResponseError("boom")

    async def delete(self, *keys: str):
        raise redis.ResponseError("boom")

    async def incr(self, key: str):
        raise redis.ResponseError("boom")


async def test_set_get_delete(cache: CacheService, fake_redis: FakeRedis) -> None:
    assert cache.is_available()
    assert await cache.set("k", {"a": [1, 2]}, ttl=60)
    assert fake_redis.ttls["k"] == 60
    assert await cache.get("k") == {"a": [1, 2]}
    assert await cache.delete("k")
    assert await cache.get("k") is None


async def test_set_without_ttl_never_expires(cache: CacheService, fake_redis: FakeRedis) -> None:
    await cache.set("k", [1])
    assert fake_redis.ttls["k"] is None


async def test_incr_counts_from_zero(cache: CacheService, fake_redis: FakeRedis) -> None:
    assert await cache.incr("n") == 1
    assert await cache.incr("n") == 2
    assert await cache.get("n") == 2
    assert fake_redis.ttls["n"] is None


async def test_invalid_json_is_a_miss(cache: CacheService, fake_redis: FakeRedis) -> None:
    fake_redis.store["k"] = "{nope"
    assert await cache.get("k") is None


async def test_unconnected_service_degrades() -> None:
    service = CacheService()
    assert not service.is_available()
    assert await service.get("k") is None
    assert await service.set("k", 1) is False
    assert await service.delete("k") is False
    assert await service.incr("k") is None


async def test_redis_errors_degrade() -> None:
    service = CacheService(redis_client=FailingRedis())
    assert await service.get("k") is None
    assert await service.set("k", 1) is False
    assert await service.delete("k") is False
    assert await service.incr("k") is None


async def test_disconnect_closes_client(cache: CacheService) -> None:
    await cache.disconnect()
    assert not cache.is_available()


def test_key_builders() -> None:
    assert recipes_list_key("recipes") == "recipes"
    assert session_key("abc") == "session:abc"


@pytest.mark.parametrize("bad", ["", "a:b"])
def test_key_builders_reject_bad_components(bad: str) -> None:
    with pytest.raises(ValueError):
        session_key(bad)
