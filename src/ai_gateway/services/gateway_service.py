"""Generic LLM gateway.

Cache-aside over the volatile namespaced tier, with one audit row per
provider call. Unlike the exact-match tier, a provider failure is never
cached and no fallback text is produced: the failure is logged to the
audit trail and re-raised.
"""

import json
from dataclasses import dataclass
from typing import Any

from ai_gateway.config import settings
from ai_gateway.entities import (
    ConversationContext,
    ProviderRequestLogEntity,
    RequestMetricsEntity,
    RequestStatus,
    is_reply_payload,
)
from ai_gateway.errors import UpstreamProviderError
from ai_gateway.logging import get_logger
from ai_gateway.protocols import LLMProvider, RequestLogStore
from ai_gateway.utils import derive_service_key, run_shielded

from .tiered_cache import TieredCache

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChatResult:
    payload: dict[str, Any]
    cached: bool


class GatewayService:
    """Namespaced LLM gateway with cost and token accounting.

    The audit write is part of the request: it completes before ``chat``
    returns or raises, and its own failure propagates.
    """

    def __init__(
        self,
        cache: TieredCache,
        provider: LLMProvider,
        request_log: RequestLogStore,
        namespace: str | None = None,
        metrics_window_hours: int | None = None,
    ) -> None:
        """Initialize the gateway service.

        Args:
            cache: Tiered cache (required).
            provider: LLM provider (required).
            request_log: Audit log store (required).
            namespace: Cache key namespace. Defaults to settings.
            metrics_window_hours: Default metrics window. Defaults to settings.
        """
        self._cache = cache
        self._provider = provider
        self._log = request_log
        self._namespace = namespace or settings.llm_cache_prefix
        self._window_hours = metrics_window_hours or settings.metrics_window_hours

    async def chat(
        self,
        service: str,
        message: str,
        user_id: str | None = None,
        context: ConversationContext | None = None,
    ) -> ChatResult:
        """Serve a chat message from cache or the provider.

        The cache key covers only (service, message); history and context
        data do not take part in it.

        Raises:
            UpstreamProviderError: After the error row has been recorded
            AuditPersistenceError: If the audit row cannot be written
        """
        key = derive_service_key(service, message, self._namespace)

        payload = await self._cache.lookup_namespaced(key)
        if payload is not None and not is_reply_payload(payload):
            logger.warning("cache_entry_unreadable", tier="namespaced", key=key, reason="payload_shape")
            payload = None

        if payload is not None:
            logger.info("cache_hit", tier="namespaced", service=service)
            return ChatResult(payload=payload, cached=True)

        logger.info("cache_miss", tier="namespaced", service=service)
        return await run_shielded(
            self._dispatch(key, service, message, user_id, context),
            tier="namespaced",
        )

    async def _dispatch(
        self,
        key: str,
        service: str,
        message: str,
        user_id: str | None,
        context: ConversationContext | None,
    ) -> ChatResult:
        try:
            reply = await self._provider.invoke(service, message, context)
        except UpstreamProviderError as e:
            logger.error("provider_call_failed", tier="namespaced", service=service, error=e.message)
            await self._log.record(
                ProviderRequestLogEntity(
                    user_id=user_id,
                    service=service,
                    prompt_text=message,
                    status=RequestStatus.ERROR,
                    error_message=e.message,
                )
            )
            raise

        payload = reply.to_payload()
        await self._cache.write_namespaced(key, payload)
        await self._log.record(
            ProviderRequestLogEntity(
                user_id=user_id,
                service=service,
                prompt_text=message,
                response_text=json.dumps(payload, ensure_ascii=False),
                cost_estimate=reply.cost,
                tokens_used=reply.total_tokens,
                status=RequestStatus.SUCCESS,
            )
        )
        return ChatResult(payload=payload, cached=False)

    async def metrics(self, window_hours: int | None = None) -> RequestMetricsEntity:
        """Aggregate the audit log.

        Args:
            window_hours: Trailing window in hours. Defaults to the configured window.

        Returns:
            RequestMetricsEntity; failed requests count towards ``total`` and
            ``failure_count`` but not towards ``avg_tokens``

        Raises:
            AuditPersistenceError: If the audit log cannot be read
        """
        return await self._log.metrics(window_hours or self._window_hours)

    @property
    def metrics_window_hours(self) -> int:
        return self._window_hours
