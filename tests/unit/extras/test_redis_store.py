"""Unit tests for RedisStore."""

from unittest.mock import AsyncMock, MagicMock

import pytest

redis = pytest.importorskip("redis")

from layercache import ICacheStore, InMemoryStore, LayerCache  # noqa: E402
from layercache_redis import RedisStore  # noqa: E402


def _make_client() -> MagicMock:
    """Create a mock redis.asyncio client."""
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.mget = AsyncMock(return_value=[])
    client.set = AsyncMock(return_value=True)
    client.exists = AsyncMock(return_value=0)
    client.delete = AsyncMock(return_value=1)
    client.scan = AsyncMock(return_value=(0, []))
    client.aclose = AsyncMock()

    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[True, True])
    client.pipeline.return_value = pipe
    return client


@pytest.fixture
def client() -> MagicMock:
    return _make_client()


@pytest.fixture
def store(client: MagicMock) -> RedisStore:
    return RedisStore(key_prefix="test", client=client)


class TestRedisStore:
    def test_implements_store_protocol(self, store: RedisStore) -> None:
        assert isinstance(store, ICacheStore)

    @pytest.mark.asyncio
    async def test_get_deserializes(self, store: RedisStore, client: MagicMock) -> None:
        client.get.return_value = b'{"name": "Alice"}'

        assert await store.get("user:1") == {"name": "Alice"}
        client.get.assert_awaited_once_with("test:user:1")

    @pytest.mark.asyncio
    async def test_get_missing(self, store: RedisStore) -> None:
        assert await store.get("user:1") is None

    @pytest.mark.asyncio
    async def test_get_multiple_uses_mget(
        self, store: RedisStore, client: MagicMock
    ) -> None:
        client.mget.return_value = [b"1", None, b"[100.0, 5]"]

        result = await store.get_multiple(["a", "b", "a-kvls-meta"])

        assert result == {"a": 1, "a-kvls-meta": [100.0, 5]}
        client.mget.assert_awaited_once_with(
            ["test:a", "test:b", "test:a-kvls-meta"]
        )

    @pytest.mark.asyncio
    async def test_get_multiple_empty(self, store: RedisStore, client: MagicMock) -> None:
        assert await store.get_multiple([]) == {}
        client.mget.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_with_ttl(self, store: RedisStore, client: MagicMock) -> None:
        assert await store.set("a", {"x": 1}, ttl=30) is True

        client.set.assert_awaited_once_with("test:a", b'{"x": 1}', ex=30)

    @pytest.mark.asyncio
    async def test_set_uses_default_ttl(self, client: MagicMock) -> None:
        store = RedisStore(key_prefix="test", default_ttl=300, client=client)

        await store.set("a", 1)

        client.set.assert_awaited_once_with("test:a", b"1", ex=300)

    @pytest.mark.asyncio
    async def test_set_zero_ttl_deletes(self, store: RedisStore, client: MagicMock) -> None:
        assert await store.set("a", 1, ttl=0) is True

        client.delete.assert_awaited_once_with("test:a")
        client.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_multiple_pipelines(
        self, store: RedisStore, client: MagicMock
    ) -> None:
        pipe = client.pipeline.return_value

        assert await store.set_multiple({"a": 1, "b": 2}, ttl=10) is True

        client.pipeline.assert_called_once_with(transaction=False)
        pipe.set.assert_any_call("test:a", b"1", ex=10)
        pipe.set.assert_any_call("test:b", b"2", ex=10)
        pipe.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_set_multiple_reports_failure(
        self, store: RedisStore, client: MagicMock
    ) -> None:
        client.pipeline.return_value.execute.return_value = [True, None]

        assert await store.set_multiple({"a": 1, "b": 2}) is False

    @pytest.mark.asyncio
    async def test_has(self, store: RedisStore, client: MagicMock) -> None:
        client.exists.return_value = 1

        assert await store.has("a") is True
        client.exists.assert_awaited_once_with("test:a")

    @pytest.mark.asyncio
    async def test_delete_multiple(self, store: RedisStore, client: MagicMock) -> None:
        assert await store.delete_multiple(["a", "b"]) is True

        client.delete.assert_awaited_once_with("test:a", "test:b")

    @pytest.mark.asyncio
    async def test_clear_scans_prefix(self, store: RedisStore, client: MagicMock) -> None:
        client.scan.side_effect = [(7, [b"test:a"]), (0, [b"test:b"])]

        assert await store.clear() is True

        assert client.scan.await_count == 2
        client.scan.assert_any_await(0, match="test:*", count=100)
        client.scan.assert_any_await(7, match="test:*", count=100)

    @pytest.mark.asyncio
    async def test_clear_escapes_glob_prefix(self, client: MagicMock) -> None:
        store = RedisStore(key_prefix="app*[v1]?", client=client)

        await store.clear()

        client.scan.assert_awaited_once_with(
            0, match=r"app\*\[v1\]\?:*", count=100
        )

    @pytest.mark.asyncio
    async def test_context_manager_closes(
        self, store: RedisStore, client: MagicMock
    ) -> None:
        async with store:
            pass

        client.aclose.assert_awaited_once()


class TestRedisLayer:
    @pytest.mark.asyncio
    async def test_outage_falls_back_to_default(self, client: MagicMock) -> None:
        client.mget.side_effect = redis.ConnectionError("connection refused")
        local = InMemoryStore()
        cache = LayerCache([local, RedisStore(client=client)], [60])

        assert await cache.get("a", "fallback") == "fallback"

    @pytest.mark.asyncio
    async def test_outage_fails_write(self, client: MagicMock) -> None:
        client.pipeline.return_value.execute.side_effect = redis.ConnectionError(
            "connection refused"
        )
        local = InMemoryStore()
        cache = LayerCache([local, RedisStore(client=client)], [60])

        assert await cache.set("a", 1) is False
        assert await local.get("a") is None
