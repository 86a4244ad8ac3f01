"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from ai_gateway.services import AskService, GatewayService, TieredCache

    cache = TieredCache(answer_store=answers, kv_store=kv)
    ask = AskService(cache=cache, provider=provider)
    gateway = GatewayService(cache=cache, provider=provider, request_log=log)
    ```
"""

from .ask_service import FALLBACK_ANSWER, AskResult, AskService
from .faq_service import FaqService
from .gateway_service import ChatResult, GatewayService
from .tiered_cache import TieredCache

__all__ = [
    "FALLBACK_ANSWER",
    "AskResult",
    "AskService",
    "ChatResult",
    "FaqService",
    "GatewayService",
    "TieredCache",
]
