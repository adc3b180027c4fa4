"""
Tests for the Redis sorted-set store using a mocked async client.
"""
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from order_pacing.storage.redis_store import RedisTimeSeriesStore


@pytest.fixture
def client():
    return AsyncMock()


@pytest.fixture
def redis_store(client):
    return RedisTimeSeriesStore(client=client)


async def test_add_uses_zadd(redis_store, client):
    await redis_store.add("orders:b", 1700000000, '{"order_id": "a"}')
    client.zadd.assert_awaited_once_with("orders:b", {'{"order_id": "a"}': 1700000000})


async def test_range_by_score_is_inclusive_with_scores(redis_store, client):
    client.zrangebyscore.return_value = [("a", 10.0), (b"b", 20.0)]

    entries = await redis_store.range_by_score("orders:b", 10, 20)

    client.zrangebyscore.assert_awaited_once_with("orders:b", 10, 20, withscores=True)
    assert entries == [("a", 10.0), ("b", 20.0)]


async def test_range_all(redis_store, client):
    client.zrange.return_value = [("a", 1.0)]

    assert await redis_store.range_all("busytimes:b") == [("a", 1.0)]
    client.zrange.assert_awaited_once_with("busytimes:b", 0, -1, withscores=True)


async def test_trim_by_score(redis_store, client):
    client.zremrangebyscore.return_value = 3
    await redis_store.trim_by_score("busytimes:b", "-inf", 100)
    client.zremrangebyscore.assert_awaited_once_with("busytimes:b", "-inf", 100)


async def test_errors_propagate_unchanged(redis_store, client):
    client.zadd.side_effect = RedisTimeoutError("timed out")
    with pytest.raises(RedisTimeoutError):
        await redis_store.add("orders:b", 1, "x")


async def test_health_check(redis_store, client):
    assert await redis_store.health_check() is True

    client.ping.side_effect = RedisConnectionError("down")
    assert await redis_store.health_check() is False


async def test_close_with_provided_client(redis_store, client):
    await redis_store.close()
    client.aclose.assert_awaited_once()
