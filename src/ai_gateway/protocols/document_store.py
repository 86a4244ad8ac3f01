"""FAQ document search protocol."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentStore(Protocol):
    """Protocol for full-text search over FAQ documents."""

    async def search(self, query: str, limit: int) -> list[dict[str, Any]]:
        """Return up to ``limit`` documents as ``{title, content, category}`` dicts."""
        ...
