"""Unit tests for the session stores (Redis mocked)."""

from unittest.mock import AsyncMock, patch

from src.sb_gateway.session.store import InMemorySessionStore, RedisSessionStore


class TestInMemorySessionStore:
    async def test_set_then_get(self) -> None:
        store = InMemorySessionStore()
        await store.set("sid-1", "alice")
        assert await store.get("sid-1") == "alice"

    async def test_unknown_session_is_none(self) -> None:
        assert await InMemorySessionStore().get("nope") is None

    async def test_set_overwrites(self) -> None:
        store = InMemorySessionStore()
        await store.set("sid-1", "alice")
        await store.set("sid-1", "bob")
        assert await store.get("sid-1") == "bob"
        assert len(store) == 1

    async def test_delete_is_idempotent(self) -> None:
        store = InMemorySessionStore()
        await store.set("sid-1", "alice")
        await store.delete("sid-1")
        await store.delete("sid-1")
        assert await store.get("sid-1") is None


class TestRedisSessionStore:
    async def test_set_uses_prefixed_key_and_ttl(self) -> None:
        redis = AsyncMock()
        with patch("src.sb_gateway.session.store.get_redis", AsyncMock(return_value=redis)):
            await RedisSessionStore(ttl_seconds=60).set("sid-1", "alice")
        redis.set.assert_awaited_once_with("session:sid-1", "alice", ex=60)

    async def test_get_returns_username(self) -> None:
        redis = AsyncMock()
        redis.get.return_value = "alice"
        with patch("src.sb_gateway.session.store.get_redis", AsyncMock(return_value=redis)):
            assert await RedisSessionStore().get("sid-1") == "alice"
        redis.get.assert_awaited_once_with("session:sid-1")

    async def test_get_missing_is_none(self) -> None:
        redis = AsyncMock()
        redis.get.return_value = None
        with patch("src.sb_gateway.session.store.get_redis", AsyncMock(return_value=redis)):
            assert await RedisSessionStore().get("sid-1") is None

    async def test_delete(self) -> None:
        redis = AsyncMock()
        with patch("src.sb_gateway.session.store.get_redis", AsyncMock(return_value=redis)):
            await RedisSessionStore().delete("sid-1")
        redis.delete.assert_awaited_once_with("session:sid-1")
