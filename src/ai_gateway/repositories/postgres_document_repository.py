"""PostgreSQL full-text search over FAQ documents."""

from typing import Any

import asyncpg

from ai_gateway.errors import PersistenceError

from .postgres_schema import DB_ERRORS


class PostgresDocumentRepository:
    """Search ``documents`` with the ``russian`` text-search configuration."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def search(self, query: str, limit: int) -> list[dict[str, Any]]:
        try:
            rows = await self._pool.fetch(
                """
                SELECT title, content, category FROM documents
                WHERE to_tsvector('russian', content) @@ plainto_tsquery('russian', $1)
                LIMIT $2
                """,
                query,
                limit,
            )
        except DB_ERRORS as e:
            raise PersistenceError(
                f"documents search failed: {e}", public_message="FAQ search failed"
            ) from e

        return [dict(row) for row in rows]
