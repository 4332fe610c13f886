"""
Redis cache management.
Provides connection pooling and helper functions for caching operations.
Every operation is a no-op when Redis is not configured or unreachable.
"""
import json
import logging
from typing import Any, Optional
from redis import asyncio as aioredis
from goonergram.config import settings

logger = logging.getLogger(__name__)


class RedisCache:
    """Redis cache manager with connection pooling."""

    def __init__(self):
        """Initialize Redis connection pool."""
        self.redis: Optional[aioredis.Redis] = None

    async def connect(self) -> None:
        """Establish connection to Redis."""
        if not settings.redis_url:
            logger.info("No Redis URL provided - running without Redis cache")
            self.redis = None
            return

        try:
            self.redis = aioredis.from_url(
                settings.redis_url,
                password=settings.redis_password if settings.redis_password else None,
                encoding="utf-8",
                decode_responses=True,
                max_connections=50,
            )
            await self.redis.ping()
            logger.info("Connected to Redis successfully")
        except Exception as e:
            logger.warning("Could not connect to Redis, running without cache: %s", e)
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    async def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        if not self.redis:
            return None

        value = await self.redis.get(key)
        if value is not None:
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return value
        return None

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None
    ) -> bool:
        """
        Set value in cache with optional TTL.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds

        Returns:
            True if successful
        """
        if not self.redis:
            return False

        value = json.dumps(value)

        if ttl:
            return bool(await self.redis.setex(key, ttl, value))
        return bool(await self.redis.set(key, value))

    async def delete(self, key: str) -> bool:
        """
        Delete key from cache.

        Args:
            key: Cache key

        Returns:
            True if key was deleted
        """
        if not self.redis:
            return False

        return bool(await self.redis.delete(key))


# Global cache instance
cache = RedisCache()


# Unread notification count caching
async def cache_unread_notification_count(user_id: str, count: int) -> bool:
    """
    Cache the unread notification count for a user.

    Short TTL; the cache is also invalidated when a notification is created
    or marked read.

    Args:
        user_id: Recipient user ID
        count: Number of unread notifications

    Returns:
        True if cached successfully
    """
    key = f"notifications:unread:{user_id}"
    return await cache.set(key, count, ttl=settings.cache_unread_ttl)


async def get_cached_unread_notification_count(user_id: str) -> Optional[int]:
    """
    Get cached unread notification count.

    Args:
        user_id: Recipient user ID

    Returns:
        Cached count or None if cache miss
    """
    key = f"notifications:unread:{user_id}"
    count = await cache.get(key)
    return int(count) if count is not None else None


async def invalidate_unread_notification_count(user_id: str) -> bool:
    """Invalidate cached unread notification count."""
    key = f"notifications:unread:{user_id}"
    return await cache.delete(key)
