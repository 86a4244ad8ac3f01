"""AI Gateway - exact-match answer caching and an LLM gateway with cost accounting.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (AnswerStore, KeyValueStore, LLMProvider, ...)
    - repositories: Data access implementations (PostgreSQL, Redis, OpenRouter)
    - services: Business logic (TieredCache, AskService, GatewayService)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)
    - utils: Cache key derivation

Usage:
    ```python
    from ai_gateway.services import AskService, TieredCache

    cache = TieredCache(answer_store=answers, kv_store=kv)
    result = await AskService(cache=cache, provider=provider).ask("42", "What is KYC?")
    ```

For HTTP API:
    ```python
    from ai_gateway.api.app import app
    ```
"""

from ai_gateway.config import get_redis_client, settings
from ai_gateway.entities import Service
from ai_gateway.errors import (
    AuditPersistenceError,
    CacheStoreError,
    GatewayError,
    PersistenceError,
    UpstreamProviderError,
    ValidationError,
)
from ai_gateway.handlers import AskHandler, GatewayHandler
from ai_gateway.protocols import AnswerStore, DocumentStore, KeyValueStore, LLMProvider, RequestLogStore
from ai_gateway.repositories import (
    OpenRouterProvider,
    PostgresAnswerRepository,
    PostgresRequestLogRepository,
    RedisKeyValueRepository,
)
from ai_gateway.services import AskService, GatewayService, TieredCache
from ai_gateway.utils import derive_exact_key, derive_service_key

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "AnswerStore",
    "DocumentStore",
    "KeyValueStore",
    "LLMProvider",
    "RequestLogStore",
    # Services (business logic)
    "AskService",
    "GatewayService",
    "TieredCache",
    # Handlers (HTTP)
    "AskHandler",
    "GatewayHandler",
    # Repositories (data access)
    "OpenRouterProvider",
    "PostgresAnswerRepository",
    "PostgresRequestLogRepository",
    "RedisKeyValueRepository",
    # Entities and errors
    "Service",
    "GatewayError",
    "ValidationError",
    "UpstreamProviderError",
    "PersistenceError",
    "CacheStoreError",
    "AuditPersistenceError",
    # Keys
    "derive_exact_key",
    "derive_service_key",
]
