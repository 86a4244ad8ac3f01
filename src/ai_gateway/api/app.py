from typing import Any

from fastapi import APIRouter, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_gateway.api.dependencies import (
    AskHandlerDep,
    GatewayHandlerDep,
    TieredCacheDep,
    lifespan,
)
from ai_gateway.config import settings
from ai_gateway.dto import (
    AskRequest,
    AskResponse,
    CacheStatsResponse,
    ChatRequest,
    ChatResponse,
    FaqSearchResponse,
    HealthCheckResponse,
    MessageResponse,
    MetricsResponse,
)
from ai_gateway.errors import ErrorResponse, GatewayError
from ai_gateway.logging import bind_request_id, clear_context, get_logger

logger = get_logger(__name__)

# Exact-match tier
ask_router = APIRouter(tags=["ask"])


@ask_router.post("/ask", response_model=AskResponse)
async def ask(request: AskRequest, handler: AskHandlerDep) -> AskResponse:
    """Answer a question, served from the exact-match cache when possible."""
    return await handler.ask(request)


@ask_router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(handler: AskHandlerDep) -> CacheStatsResponse:
    """Count cached answers."""
    return await handler.get_stats()


@ask_router.delete("/cache", response_model=MessageResponse)
async def clear_cache(handler: AskHandlerDep) -> MessageResponse:
    """Clear the exact-match cache."""
    return await handler.clear_cache()


# Namespaced gateway tier
llm_router = APIRouter(tags=["llm"])


@llm_router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, handler: GatewayHandlerDep) -> ChatResponse:
    """Send a message through the LLM gateway."""
    return await handler.chat(request)


@llm_router.get("/faq-search", response_model=FaqSearchResponse)
async def faq_search(
    handler: GatewayHandlerDep,
    query: str | None = None,
    limit: int = Query(5, ge=1, le=50),
) -> FaqSearchResponse:
    """Full-text search over FAQ documents."""
    return await handler.faq_search(query, limit)


@llm_router.get("/metrics", response_model=MetricsResponse)
async def metrics(
    handler: GatewayHandlerDep,
    hours: int | None = Query(None, ge=1),
) -> MetricsResponse:
    """Aggregate the audit log over a trailing window (24h by default)."""
    return await handler.metrics(hours)


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render domain errors; internal details go to the log only."""
    if exc.status_code >= 500:
        logger.error(
            "request_failed",
            path=request.url.path,
            code=exc.code,
            error=exc.message,
            **exc.details,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response().model_dump())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_invalid", path=request.url.path, errors=len(exc.errors()))
    body = ErrorResponse(code="VALIDATION_ERROR", message="Invalid request")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def create_app(app_lifespan=lifespan) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_lifespan: Lifespan that populates app.state. Tests pass one
            wiring in-memory fakes.
    """
    app = FastAPI(
        title="AI Gateway API",
        description="Exact-match answer cache and LLM gateway with cost accounting",
        version="0.1.0",
        lifespan=app_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = bind_request_id(request.headers.get("X-Request-ID"))
        try:
            response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response

    app.add_exception_handler(GatewayError, gateway_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]

    app.include_router(ask_router)
    app.include_router(ask_router, prefix="/api/ai", include_in_schema=False)
    app.include_router(llm_router, prefix="/llm")
    app.include_router(llm_router, prefix="/api/llm", include_in_schema=False)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "AI Gateway API",
            "version": "0.1.0",
            "endpoints": {
                "ask": "/ask",
                "cache_stats": "/cache/stats",
                "chat": "/llm/chat",
                "metrics": "/llm/metrics",
                "faq_search": "/llm/faq-search",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(cache: TieredCacheDep) -> JSONResponse:
        """Health check endpoint."""
        checks = await cache.health()
        healthy = all(checks.values())
        body = HealthCheckResponse(
            status="healthy" if healthy else "unhealthy",
            redis=checks["namespaced"],
            postgres=checks["exact"],
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(),
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ai_gateway.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
