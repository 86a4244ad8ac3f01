"""Volatile key-value storage protocol.

Backs the namespaced tier. Values are opaque strings; expiry set through
``set_with_expiry`` is advisory, callers must not rely on the store to
drop entries on time.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for volatile key-value stores (Redis by default).

    Implementations raise ``CacheStoreError`` on backend failures.
    """

    async def get(self, key: str) -> str | None:
        """Return the raw value for a key, or None."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store a value without expiry."""
        ...

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that the backend may drop after ``ttl_seconds``."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...
