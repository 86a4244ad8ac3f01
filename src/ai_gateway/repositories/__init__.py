"""Repository layer for data access.

This layer abstracts external dependencies (Redis, PostgreSQL, the LLM API)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with in-memory fakes
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from .openrouter_provider import OpenRouterProvider, build_messages, estimate_cost
from .postgres_answer_repository import PostgresAnswerRepository
from .postgres_document_repository import PostgresDocumentRepository
from .postgres_request_log_repository import PostgresRequestLogRepository
from .postgres_schema import ensure_schema
from .redis_repository import RedisKeyValueRepository

__all__ = [
    "OpenRouterProvider",
    "PostgresAnswerRepository",
    "PostgresDocumentRepository",
    "PostgresRequestLogRepository",
    "RedisKeyValueRepository",
    "build_messages",
    "ensure_schema",
    "estimate_cost",
]
