"""FAQ document search (pass-through to the document store)."""

from typing import Any

from ai_gateway.protocols import DocumentStore

DEFAULT_LIMIT = 5


class FaqService:
    """Full-text search over FAQ documents.

    No caching: results come straight from the document store.
    """

    def __init__(self, documents: DocumentStore) -> None:
        """Initialize the FAQ service.

        Args:
            documents: Document store with full-text search (required).
        """
        self._documents = documents

    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[dict[str, Any]]:
        """Search FAQ documents.

        Args:
            query: Free-text search query
            limit: Maximum number of documents to return

        Returns:
            Matching documents as dicts with title, content and category

        Raises:
            PersistenceError: If the document store is unavailable
        """
        return await self._documents.search(query, limit)
