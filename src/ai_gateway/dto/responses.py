"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field

from .requests import CamelModel


class AskResponse(CamelModel):
    """Response DTO for POST /ask."""

    answer: str
    cached: bool = Field(..., description="True when served from the exact-match store")
    question_hash: str = Field(..., description="SHA-256 of the normalized question")


class CacheStatsResponse(CamelModel):
    """Response DTO for exact-match cache statistics."""

    total_cached_responses: int = Field(..., ge=0)
    unique_questions: int = Field(..., ge=0)


class MessageResponse(BaseModel):
    message: str


class ChatReply(BaseModel):
    """Provider reply as cached and returned by the gateway."""

    message: str
    tokens: int = Field(..., description="Total tokens used")
    model: str
    cost: float = Field(..., description="Estimated cost in USD")


class ChatResponse(BaseModel):
    """Response DTO for POST /llm/chat."""

    response: ChatReply
    cached: bool
    timestamp: str = Field(..., description="ISO-8601 response time")


class RequestMetrics(BaseModel):
    """Audit aggregates; snake_case on the wire."""

    total_requests: int
    successful: int
    failed: int
    total_cost: float
    avg_tokens: float


class MetricsResponse(BaseModel):
    metrics: RequestMetrics
    period: str = Field(..., description='Window length, e.g. "24h"')


class FaqDocument(BaseModel):
    title: str
    content: str
    category: str | None = None


class FaqSearchResponse(BaseModel):
    results: list[FaqDocument]
    count: int


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    redis: bool
    postgres: bool
