"""
Tests for the Redis cache wrapper.
"""
import pytest

from goonergram.core.cache import (
    RedisCache,
    cache,
    cache_unread_notification_count,
    get_cached_unread_notification_count,
    invalidate_unread_notification_count,
)


@pytest.mark.asyncio
class TestWithoutRedis:
    """Every helper is a no-op when Redis is not connected."""

    async def test_helpers_are_noops(self):
        assert cache.redis is None

        assert await cache_unread_notification_count("google:1001", 4) is False
        assert await get_cached_unread_notification_count("google:1001") is None
        assert await invalidate_unread_notification_count("google:1001") is False

    async def test_connect_without_url(self, mocker):
        mocker.patch("goonergram.core.cache.settings.redis_url", None)
        redis_cache = RedisCache()

        await redis_cache.connect()

        assert redis_cache.redis is None


@pytest.mark.asyncio
class TestWithRedis:
    """Values are JSON encoded on the way in and decoded on the way out."""

    async def test_set_uses_ttl(self, mocker):
        redis_cache = RedisCache()
        redis_cache.redis = mocker.AsyncMock()
        redis_cache.redis.setex.return_value = True

        assert await redis_cache.set("k", {"count": 1}, ttl=10) is True
        redis_cache.redis.setex.assert_awaited_once_with("k", 10, '{"count": 1}')

    async def test_get_decodes_json(self, mocker):
        redis_cache = RedisCache()
        redis_cache.redis = mocker.AsyncMock()
        redis_cache.redis.get.return_value = "7"

        assert await redis_cache.get("k") == 7

    async def test_unread_count_round_trip(self, mocker):
        mocker.patch.object(cache, "redis", mocker.AsyncMock())
        cache.redis.get.return_value = "5"

        assert await get_cached_unread_notification_count("google:1001") == 5
        cache.redis.get.assert_awaited_once_with("notifications:unread:google:1001")
