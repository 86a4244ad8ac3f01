"""Tiered cache service.

Puts the two independent cache surfaces behind one cache-aside contract:

- exact-match tier: durable, append-only, keyed by normalized-question hash
- namespaced tier: volatile, TTL-bound, keyed by (service, message) hash

Reads and writes on both tiers degrade to a miss / no-op when the backend
fails; the failure is logged and never reaches the caller.
"""

import json
import time
from collections.abc import Callable
from typing import Any

from ai_gateway.config import settings
from ai_gateway.entities import CachedAnswerEntity, CacheStatsEntity
from ai_gateway.errors import CacheStoreError
from ai_gateway.logging import get_logger
from ai_gateway.protocols import AnswerStore, KeyValueStore

logger = get_logger(__name__)


class TieredCache:
    """Exact-match and namespaced cache surfaces.

    Namespaced entries are wrapped in an envelope recording when they were
    written, and are treated as absent once ``ttl`` seconds have passed, even
    if the backend has not physically expired them yet.

    Example:
        ```python
        cache = TieredCache(
            answer_store=PostgresAnswerRepository(pool),
            kv_store=RedisKeyValueRepository.create(),
        )
        answer = await cache.lookup_exact(derive_exact_key("What is KYC?"))
        ```
    """

    def __init__(
        self,
        answer_store: AnswerStore,
        kv_store: KeyValueStore,
        ttl: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the tiered cache.

        Args:
            answer_store: Durable exact-match store (required).
            kv_store: Volatile key-value store (required).
            ttl: Default namespaced TTL in seconds. Defaults to settings.
            clock: Returns the current Unix time; injectable for tests.
        """
        self._answers = answer_store
        self._kv = kv_store
        self._ttl = ttl or settings.llm_cache_ttl
        self._clock = clock

    # Exact-match tier

    async def lookup_exact(self, question_hash: str) -> str | None:
        """Return the cached answer for a question hash, or None on miss or failure."""
        try:
            return await self._answers.get_answer(question_hash)
        except CacheStoreError as e:
            logger.warning("cache_read_degraded", tier="exact", error=e.message)
            return None

    async def write_exact(
        self,
        question_hash: str,
        question: str,
        answer: str,
        user_id: str | None = None,
    ) -> None:
        """Best-effort insert-or-ignore; a failure is logged and dropped."""
        entry = CachedAnswerEntity(
            question_hash=question_hash,
            question_original=question,
            answer=answer,
            user_id=user_id,
        )
        try:
            await self._answers.insert_answer(entry)
        except CacheStoreError as e:
            logger.error("cache_write_failed", tier="exact", error=e.message)

    async def exact_stats(self) -> CacheStatsEntity:
        return await self._answers.get_stats()

    async def clear_exact(self) -> None:
        await self._answers.clear_all()
        logger.info("cache_cleared", tier="exact")

    # Namespaced tier

    async def lookup_namespaced(self, key: str) -> Any | None:
        """Return the cached payload, or None when absent, expired, unreadable or on failure."""
        try:
            raw = await self._kv.get(key)
        except CacheStoreError as e:
            logger.warning("cache_read_degraded", tier="namespaced", error=e.message)
            return None

        if raw is None:
            return None

        try:
            envelope = json.loads(raw)
            stored_at = float(envelope["stored_at"])
            ttl = int(envelope["ttl"])
            payload = envelope["payload"]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("cache_entry_unreadable", tier="namespaced", key=key, error=str(e))
            return None

        if self._clock() - stored_at >= ttl:
            logger.debug("cache_entry_expired", tier="namespaced", key=key)
            return None

        return payload

    async def write_namespaced(self, key: str, payload: Any, ttl_seconds: int | None = None) -> None:
        """Best-effort write with expiry; a failure is logged and dropped."""
        ttl = ttl_seconds or self._ttl
        envelope = json.dumps(
            {"stored_at": self._clock(), "ttl": ttl, "payload": payload},
            ensure_ascii=False,
        )
        try:
            await self._kv.set_with_expiry(key, envelope, ttl)
        except CacheStoreError as e:
            logger.error("cache_write_failed", tier="namespaced", key=key, error=e.message)

    async def health(self) -> dict[str, bool]:
        """Reachability of both backends."""
        return {
            "exact": await self._answers.health_check(),
            "namespaced": await self._kv.health_check(),
        }

    @property
    def ttl(self) -> int:
        return self._ttl
