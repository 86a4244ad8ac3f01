"""PostgreSQL implementation of AnswerStore.

Backs the exact-match tier with the append-only ``ai_cache`` table.
"""

import asyncpg

from ai_gateway.entities import CachedAnswerEntity, CacheStatsEntity
from ai_gateway.errors import CacheStoreError

from .postgres_schema import DB_ERRORS


class PostgresAnswerRepository:
    """PostgreSQL answer store.

    This class satisfies the AnswerStore protocol through structural
    typing - no explicit inheritance needed.

    Duplicate inserts rely on ``ON CONFLICT DO NOTHING`` against the unique
    ``question_hash`` column, so concurrent writers for the same question
    need no locking: whoever commits first wins.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        """Initialize the repository.

        Args:
            pool: Shared asyncpg connection pool
        """
        self._pool = pool

    async def get_answer(self, question_hash: str) -> str | None:
        """Look up the cached answer for a question hash.

        Args:
            question_hash: SHA-256 hex of the normalized question

        Returns:
            The stored answer, or None if absent

        Raises:
            CacheStoreError: If the query fails
        """
        try:
            return await self._pool.fetchval(
                "SELECT answer FROM ai_cache WHERE question_hash = $1",
                question_hash,
            )
        except DB_ERRORS as e:
            raise CacheStoreError(f"ai_cache lookup failed: {e}") from e

    async def insert_answer(self, entry: CachedAnswerEntity) -> None:
        """Insert an answer unless one already exists for its hash.

        Args:
            entry: The answer to store; an existing row is left untouched

        Raises:
            CacheStoreError: If the insert fails
        """
        try:
            await self._pool.execute(
                """
                INSERT INTO ai_cache (user_id, question_hash, question_original, answer)
                VALUES ($1, $2, $3, $4)
                ON CONFLICT (question_hash) DO NOTHING
                """,
                entry.user_id,
                entry.question_hash,
                entry.question_original,
                entry.answer,
            )
        except DB_ERRORS as e:
            raise CacheStoreError(f"ai_cache insert failed: {e}") from e

    async def get_stats(self) -> CacheStatsEntity:
        """Count stored answers.

        Returns:
            CacheStatsEntity with total and distinct-hash counts

        Raises:
            CacheStoreError: If the query fails
        """
        try:
            row = await self._pool.fetchrow(
                """
                SELECT COUNT(*) AS total, COUNT(DISTINCT question_hash) AS unique_questions
                FROM ai_cache
                """
            )
        except DB_ERRORS as e:
            raise CacheStoreError(f"ai_cache stats failed: {e}") from e

        return CacheStatsEntity(
            total_cached_responses=int(row["total"]),
            unique_questions=int(row["unique_questions"]),
        )

    async def clear_all(self) -> None:
        """Delete every stored answer.

        Raises:
            CacheStoreError: If the truncate fails
        """
        try:
            await self._pool.execute("TRUNCATE TABLE ai_cache")
        except DB_ERRORS as e:
            raise CacheStoreError(f"ai_cache truncate failed: {e}") from e

    async def health_check(self) -> bool:
        """Check if PostgreSQL is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return await self._pool.fetchval("SELECT 1") == 1
        except DB_ERRORS:
            return False
