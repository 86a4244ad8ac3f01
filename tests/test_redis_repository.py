"""
Tests for the Redis key-value repository against a stub client.
"""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from ai_gateway.errors import CacheStoreError
from ai_gateway.repositories import RedisKeyValueRepository


class StubRedis:
    """Records commands and returns canned results."""

    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error
        self.commands: list[tuple] = []
        self.closed = False

    def _call(self, *command, result=None):
        self.commands.append(command)
        if self.error is not None:
            raise self.error
        return result

    async def get(self, key):
        return self._call("GET", key, result=self.value)

    async def set(self, key, value):
        return self._call("SET", key, value, result=True)

    async def setex(self, key, ttl, value):
        return self._call("SETEX", key, ttl, value, result=True)

    async def ping(self):
        return self._call("PING", result=True)

    async def aclose(self):
        self.closed = True


@pytest.mark.asyncio
async def test_get_returns_stored_value():
    client = StubRedis(value='{"payload": 1}')
    repository = RedisKeyValueRepository.create(redis_client=client)

    assert await repository.get("llm_cache:chatbot:abc") == '{"payload": 1}'
    assert client.commands == [("GET", "llm_cache:chatbot:abc")]


@pytest.mark.asyncio
async def test_set_with_expiry_uses_setex_argument_order():
    client = StubRedis()
    repository = RedisKeyValueRepository(redis_client=client)

    await repository.set_with_expiry("llm_cache:chatbot:abc", "envelope", 86400)

    assert client.commands == [("SETEX", "llm_cache:chatbot:abc", 86400, "envelope")]


@pytest.mark.asyncio
async def test_set_without_expiry():
    client = StubRedis()
    repository = RedisKeyValueRepository(redis_client=client)

    await repository.set("k", "v")

    assert client.commands == [("SET", "k", "v")]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call",
    [
        lambda repo: repo.get("k"),
        lambda repo: repo.set("k", "v"),
        lambda repo: repo.set_with_expiry("k", "v", 10),
    ],
)
async def test_redis_errors_become_cache_store_errors(call):
    repository = RedisKeyValueRepository(redis_client=StubRedis(error=RedisConnectionError("refused")))

    with pytest.raises(CacheStoreError) as exc_info:
        await call(repository)

    assert exc_info.value.code == "PERSISTENCE_ERROR"
    assert "refused" in exc_info.value.message


@pytest.mark.asyncio
async def test_health_check():
    assert await RedisKeyValueRepository(redis_client=StubRedis()).health_check() is True
    down = RedisKeyValueRepository(redis_client=StubRedis(error=RedisConnectionError("refused")))
    assert await down.health_check() is False


@pytest.mark.asyncio
async def test_close_closes_client():
    client = StubRedis()
    await RedisKeyValueRepository(redis_client=client).close()
    assert client.closed is True
