"""Tests for the Redis key-value store against a mocked asyncio client."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from feedstack.repositories import RedisKeyValueStore


def make_redis(scan_keys: list[str] | None = None) -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock(return_value="value")
    client.set = AsyncMock()
    client.delete = AsyncMock()
    client.mget = AsyncMock(return_value=["1", None])
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()

    async def scan_iter(match=None):
        for key in scan_keys or []:
            yield key

    client.scan_iter = MagicMock(side_effect=scan_iter)
    return client


@pytest.mark.asyncio
async def test_single_key_operations():
    client = make_redis()
    store = RedisKeyValueStore(redis_client=client)

    assert await store.get_item("@feedstack:a") == "value"
    await store.set_item("@feedstack:a", "1")
    await store.remove_item("@feedstack:a")

    client.get.assert_awaited_once_with("@feedstack:a")
    client.set.assert_awaited_once_with("@feedstack:a", "1")
    client.delete.assert_awaited_once_with("@feedstack:a")


@pytest.mark.asyncio
async def test_multi_get_pairs_keys_with_values():
    client = make_redis()
    store = RedisKeyValueStore(redis_client=client)

    assert await store.multi_get(["a", "b"]) == [("a", "1"), ("b", None)]
    client.mget.assert_awaited_once_with(["a", "b"])


@pytest.mark.asyncio
async def test_empty_batches_skip_redis():
    client = make_redis()
    store = RedisKeyValueStore(redis_client=client)

    assert await store.multi_get([]) == []
    await store.multi_remove([])

    client.mget.assert_not_awaited()
    client.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_keys_and_clear_are_namespaced():
    client = make_redis(scan_keys=["@feedstack:a", "@feedstack:b"])
    store = RedisKeyValueStore(redis_client=client)

    assert await store.get_all_keys() == ["@feedstack:a", "@feedstack:b"]
    client.scan_iter.assert_called_with(match="@feedstack:*")

    await store.clear()
    client.delete.assert_awaited_once_with("@feedstack:a", "@feedstack:b")


@pytest.mark.asyncio
async def test_health_check():
    client = make_redis()
    store = RedisKeyValueStore(redis_client=client)
    assert await store.health_check() is True

    client.ping.side_effect = ConnectionError("down")
    assert await store.health_check() is False


@pytest.mark.asyncio
async def test_close_releases_pool():
    client = make_redis()
    await RedisKeyValueStore(redis_client=client).close()
    client.aclose.assert_awaited_once()
