"""Domain entities for internal representation.

These are pure dataclasses (frozen) and enums used internally by services
and repositories. They are NOT used for API contracts - use DTOs from the
dto package for that.
"""

from .cached_answer import CachedAnswerEntity, CacheStatsEntity
from .provider_reply import ChatTurn, ConversationContext, ProviderReply, is_reply_payload
from .request_log import ProviderRequestLogEntity, RequestMetricsEntity, RequestStatus
from .service import SYSTEM_PROMPTS, Service

__all__ = [
    "CachedAnswerEntity",
    "CacheStatsEntity",
    "ChatTurn",
    "ConversationContext",
    "ProviderReply",
    "ProviderRequestLogEntity",
    "RequestMetricsEntity",
    "RequestStatus",
    "SYSTEM_PROMPTS",
    "is_reply_payload",
    "Service",
]
