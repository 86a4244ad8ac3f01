"""Redis implementation of KeyValueStore.

Backs the namespaced tier. It's the default implementation and satisfies
the KeyValueStore protocol.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError

from ai_gateway.config import get_redis_client
from ai_gateway.errors import CacheStoreError


class RedisKeyValueRepository:
    """Redis key-value store.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.

    Every operation is a single Redis command, so the shared client can be
    used from many concurrent requests without extra locking.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis repository.

        Args:
            redis_client: Async Redis client instance. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls, redis_client: redis.Redis | None = None) -> "RedisKeyValueRepository":
        """Factory method to create RedisKeyValueRepository with defaults.

        Args:
            redis_client: Async Redis client. If None, built from settings.

        Returns:
            Configured RedisKeyValueRepository
        """
        return cls(redis_client=redis_client)

    async def get(self, key: str) -> str | None:
        """Get the raw value stored under a key.

        Args:
            key: The namespaced cache key

        Returns:
            The stored string, or None if absent

        Raises:
            CacheStoreError: If Redis is unreachable or errors
        """
        try:
            return await self._client.get(key)
        except RedisError as e:
            raise CacheStoreError(f"Redis GET failed: {e}") from e

    async def set(self, key: str, value: str) -> None:
        """Store a value without expiry.

        Raises:
            CacheStoreError: If Redis is unreachable or errors
        """
        try:
            await self._client.set(key, value)
        except RedisError as e:
            raise CacheStoreError(f"Redis SET failed: {e}") from e

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value with a Redis-side expiry (SETEX).

        Args:
            key: The namespaced cache key
            value: Serialized payload
            ttl_seconds: Time-to-live in seconds

        Raises:
            CacheStoreError: If Redis is unreachable or errors
        """
        try:
            await self._client.setex(key, ttl_seconds, value)
        except RedisError as e:
            raise CacheStoreError(f"Redis SETEX failed: {e}") from e

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
