"""Exact-match answer storage protocol.

Defines the interface for the durable, append-only question/answer store
backing the exact-match tier.

Implementations can include:
- PostgreSQL (default)
- Any store with an insert-or-ignore primitive
"""

from typing import Protocol, runtime_checkable

from ai_gateway.entities import CachedAnswerEntity, CacheStatsEntity


@runtime_checkable
class AnswerStore(Protocol):
    """Protocol for exact-match answer storage.

    Implementations raise ``CacheStoreError`` on backend failures.
    """

    async def get_answer(self, question_hash: str) -> str | None:
        """Return the stored answer for a question hash, or None."""
        ...

    async def insert_answer(self, entry: CachedAnswerEntity) -> None:
        """Insert an answer unless the hash already exists.

        A duplicate insert must be a silent no-op: the existing row wins.
        """
        ...

    async def get_stats(self) -> CacheStatsEntity:
        """Count stored answers and distinct question hashes."""
        ...

    async def clear_all(self) -> None:
        """Delete every stored answer."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...
