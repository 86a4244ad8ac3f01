"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Clients and services built once in the lifespan, stored in app.state
    - Dependency functions retrieve from request.app.state
    - Tests swap in their own lifespan with fakes, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from ai_gateway.config import create_db_pool, get_redis_client, settings
from ai_gateway.handlers import AskHandler, GatewayHandler
from ai_gateway.logging import configure_logging, get_logger
from ai_gateway.repositories import (
    OpenRouterProvider,
    PostgresAnswerRepository,
    PostgresDocumentRepository,
    PostgresRequestLogRepository,
    RedisKeyValueRepository,
    ensure_schema,
)
from ai_gateway.services import AskService, FaqService, GatewayService, TieredCache

logger = get_logger(__name__)


def _from_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized. Check lifespan setup.")
    return value


def get_ask_handler(request: Request) -> AskHandler:
    """Dependency injection for AskHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "ask_handler")


def get_gateway_handler(request: Request) -> GatewayHandler:
    """Dependency injection for GatewayHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "gateway_handler")


def get_tiered_cache(request: Request) -> TieredCache:
    """Dependency injection for TieredCache from app.state (health checks)."""
    return _from_state(request, "tiered_cache")


def install(
    app: FastAPI,
    cache: TieredCache,
    ask_service: AskService,
    gateway_service: GatewayService,
    faq_service: FaqService,
) -> None:
    """Store services and their handlers in app.state."""
    app.state.tiered_cache = cache
    app.state.ask_handler = AskHandler(ask_service=ask_service)
    app.state.gateway_handler = GatewayHandler(
        gateway_service=gateway_service,
        faq_service=faq_service,
    )


def uninstall(app: FastAPI) -> None:
    """Remove everything ``install`` put in app.state."""
    del app.state.gateway_handler
    del app.state.ask_handler
    del app.state.tiered_cache


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Clients - one PostgreSQL pool, one Redis client, one HTTP client
    2. Repositories over those clients
    3. Services (tiered cache, ask, gateway, faq)
    4. Handlers

    Cleanup:
        Removes handlers from app.state and closes every client on shutdown
    """
    configure_logging(settings.log_level, settings.log_json)

    pool = await create_db_pool()
    await ensure_schema(pool)
    kv_store = RedisKeyValueRepository.create(redis_client=get_redis_client())
    provider = OpenRouterProvider.create()

    cache = TieredCache(
        answer_store=PostgresAnswerRepository(pool),
        kv_store=kv_store,
    )
    install(
        app,
        cache=cache,
        ask_service=AskService(cache=cache, provider=provider),
        gateway_service=GatewayService(
            cache=cache,
            provider=provider,
            request_log=PostgresRequestLogRepository(pool),
        ),
        faq_service=FaqService(PostgresDocumentRepository(pool)),
    )

    logger.info(
        "gateway_started",
        model=provider.model_name,
        cache_ttl=cache.ttl,
        health=await cache.health(),
    )

    yield

    uninstall(app)
    await provider.close()
    await kv_store.close()
    await pool.close()
    logger.info("gateway_stopped")


# Type aliases for cleaner dependency injection
AskHandlerDep = Annotated[AskHandler, Depends(get_ask_handler)]
GatewayHandlerDep = Annotated[GatewayHandler, Depends(get_gateway_handler)]
TieredCacheDep = Annotated[TieredCache, Depends(get_tiered_cache)]
