"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import AskRequest, ChatContext, ChatRequest, ChatTurnItem
from .responses import (
    AskResponse,
    CacheStatsResponse,
    ChatReply,
    ChatResponse,
    FaqDocument,
    FaqSearchResponse,
    HealthCheckResponse,
    MessageResponse,
    MetricsResponse,
    RequestMetrics,
)

__all__ = [
    "AskRequest",
    "ChatContext",
    "ChatRequest",
    "ChatTurnItem",
    "AskResponse",
    "CacheStatsResponse",
    "ChatReply",
    "ChatResponse",
    "FaqDocument",
    "FaqSearchResponse",
    "HealthCheckResponse",
    "MessageResponse",
    "MetricsResponse",
    "RequestMetrics",
]
