"""
Redis Store Tests

Tests for RedisTagStore with a mocked redis.asyncio client.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import WatchError

from rtags.common.exceptions import StaleReadError, StoreError
from rtags.common.ports import SetOp, StoreCommand
from rtags.index import TagIndex
from rtags.infra.config import StoreConfig
from rtags.infra.store import RedisTagStore

REDIS_CLASS = "rtags.infra.store.redis.Redis"


def make_client(execute_result=None):
    """Mock client whose pipeline() is an async context manager."""
    pipe = MagicMock()
    pipe.__aenter__ = AsyncMock(return_value=pipe)
    pipe.__aexit__ = AsyncMock(return_value=False)
    pipe.execute = AsyncMock(return_value=execute_result or [])
    pipe.watch = AsyncMock()

    client = MagicMock()
    client.pipeline = MagicMock(return_value=pipe)
    client.smembers = AsyncMock(return_value=set())
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client, pipe


class TestRedisTagStoreBasics:
    """Test basic RedisTagStore functionality."""

    def test_creation_defaults(self):
        store = RedisTagStore()

        assert store.host == "localhost"
        assert store.port == 6379
        assert store.db == 0
        assert store.password is None
        assert store._client_init.get_if_exists() is None

    def test_from_config(self):
        store = RedisTagStore.from_config(StoreConfig(host="redis.example.com", port=6380, db=2, password="pw"))

        assert store.host == "redis.example.com"
        assert store.port == 6380
        assert store.db == 2
        assert store.password == "pw"


class TestGetClient:
    """Test _get_client method."""

    @pytest.mark.asyncio
    async def test_creates_client(self):
        store = RedisTagStore(socket_timeout=2.0)

        with patch(REDIS_CLASS) as mock_redis_class:
            mock_client = MagicMock()
            mock_redis_class.return_value = mock_client

            client = await store._get_client()

            assert client is mock_client
            mock_redis_class.assert_called_once_with(
                host="localhost",
                port=6379,
                password=None,
                db=0,
                socket_timeout=2.0,
                decode_responses=True,
            )

    @pytest.mark.asyncio
    async def test_caches_client(self):
        store = RedisTagStore()

        with patch(REDIS_CLASS) as mock_redis_class:
            mock_redis_class.return_value = MagicMock()

            client1 = await store._get_client()
            client2 = await store._get_client()

            assert client1 is client2
            assert mock_redis_class.call_count == 1


class TestExecuteBatch:
    """Test execute_batch method."""

    @pytest.mark.asyncio
    async def test_queues_commands_in_transaction(self):
        store = RedisTagStore()
        client, pipe = make_client(execute_result=[1, 1, 0, 1, {"a"}])
        commands = [
            StoreCommand.of(SetOp.SADD, "docs:tag:a", "1"),
            StoreCommand.of(SetOp.SADD, "docs:object:1", "a"),
            StoreCommand.of(SetOp.SREM, "docs:tag:b", "1"),
            StoreCommand.of(SetOp.DEL, "docs:object:2"),
            StoreCommand.of(SetOp.SINTER, "docs:tag:a", "docs:tag:c"),
        ]

        with patch(REDIS_CLASS, return_value=client):
            results = await store.execute_batch(commands)

        assert results == [1, 1, 0, 1, {"a"}]
        client.pipeline.assert_called_once_with(transaction=True)
        pipe.sadd.assert_any_call("docs:tag:a", "1")
        pipe.sadd.assert_any_call("docs:object:1", "a")
        pipe.srem.assert_called_once_with("docs:tag:b", "1")
        pipe.delete.assert_called_once_with("docs:object:2")
        pipe.sinter.assert_called_once_with("docs:tag:a", "docs:tag:c")
        pipe.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_batch_skips_redis(self):
        store = RedisTagStore()

        with patch(REDIS_CLASS) as mock_redis_class:
            assert await store.execute_batch([]) == []

            mock_redis_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_redis_error_wrapped(self):
        store = RedisTagStore()
        client, pipe = make_client()
        pipe.execute = AsyncMock(side_effect=RedisConnectionError("Connection refused"))

        with patch(REDIS_CLASS, return_value=client):
            with pytest.raises(StoreError, match="Connection refused") as exc_info:
                await store.execute_batch([StoreCommand.of(SetOp.SMEMBERS, "docs:object:1")])

        assert isinstance(exc_info.value.__cause__, RedisConnectionError)


class TestExecuteGuarded:
    """Test execute_guarded method."""

    @pytest.mark.asyncio
    async def test_watch_read_plan_commit(self):
        store = RedisTagStore()
        client, pipe = make_client(execute_result=[1, 1])
        pipe.smembers = AsyncMock(return_value={"red"})
        seen = []

        def plan(members):
            seen.append(members)
            return [
                StoreCommand.of(SetOp.DEL, "docs:object:1"),
                StoreCommand.of(SetOp.SREM, "docs:tag:red", "1"),
            ]

        with patch(REDIS_CLASS, return_value=client):
            results = await store.execute_guarded("docs:object:1", plan)

        assert results == [1, 1]
        assert seen == [{"red"}]
        pipe.watch.assert_awaited_once_with("docs:object:1")
        pipe.smembers.assert_awaited_once_with("docs:object:1")
        pipe.multi.assert_called_once()
        pipe.delete.assert_called_once_with("docs:object:1")
        pipe.srem.assert_called_once_with("docs:tag:red", "1")

    @pytest.mark.asyncio
    async def test_watch_error_becomes_stale_read(self):
        store = RedisTagStore()
        client, pipe = make_client()
        pipe.smembers = AsyncMock(return_value=set())
        pipe.execute = AsyncMock(side_effect=WatchError("Watched variable changed."))

        with patch(REDIS_CLASS, return_value=client):
            with pytest.raises(StaleReadError) as exc_info:
                await store.execute_guarded("docs:object:1", lambda members: [])

        assert exc_info.value.retryable is True
        assert exc_info.value.details == {"key": "docs:object:1"}

    @pytest.mark.asyncio
    async def test_index_retries_after_watch_error(self):
        store = RedisTagStore()
        client, pipe = make_client()
        pipe.smembers = AsyncMock(return_value={"red"})
        pipe.execute = AsyncMock(side_effect=[WatchError("changed"), [1, 1]])
        index = TagIndex("docs", store)
        received = []

        with patch(REDIS_CLASS, return_value=client):
            await index.remove_object(1, callback=lambda err, res: received.append((err, res)))

        assert received == [(None, [1, 1])]
        assert pipe.watch.await_count == 2


class TestReadMembers:
    @pytest.mark.asyncio
    async def test_returns_set(self):
        store = RedisTagStore()
        client, _ = make_client()
        client.smembers = AsyncMock(return_value={"a", "b"})

        with patch(REDIS_CLASS, return_value=client):
            assert await store.read_members("docs:object:1") == {"a", "b"}

    @pytest.mark.asyncio
    async def test_redis_error_wrapped(self):
        store = RedisTagStore()
        client, _ = make_client()
        client.smembers = AsyncMock(side_effect=RedisConnectionError("gone"))

        with patch(REDIS_CLASS, return_value=client):
            with pytest.raises(StoreError):
                await store.read_members("docs:object:1")


class TestHealthAndClose:
    @pytest.mark.asyncio
    async def test_ping_success(self):
        store = RedisTagStore()
        client, _ = make_client()

        with patch(REDIS_CLASS, return_value=client):
            assert await store.ping() is True

    @pytest.mark.asyncio
    async def test_ping_failure(self):
        store = RedisTagStore()
        client, _ = make_client()
        client.ping = AsyncMock(side_effect=RedisConnectionError("down"))

        with patch(REDIS_CLASS, return_value=client):
            assert await store.ping() is False

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        store = RedisTagStore()
        client, _ = make_client()

        with patch(REDIS_CLASS, return_value=client):
            await store._get_client()
            await store.close()

        client.aclose.assert_awaited_once()
        assert store._client_init.get_if_exists() is None

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self):
        store = RedisTagStore()

        await store.close()

        assert store._client_init.get_if_exists() is None
