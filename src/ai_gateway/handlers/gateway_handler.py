"""HTTP handlers for the namespaced LLM gateway."""

from datetime import datetime, timezone

from ai_gateway.dto import (
    ChatReply,
    ChatRequest,
    ChatResponse,
    FaqDocument,
    FaqSearchResponse,
    MetricsResponse,
    RequestMetrics,
)
from ai_gateway.entities import ChatTurn, ConversationContext, Service
from ai_gateway.errors import ValidationError
from ai_gateway.services import FaqService, GatewayService


class GatewayHandler:
    """HTTP handlers for /llm/chat, /llm/metrics and /llm/faq-search."""

    def __init__(self, gateway_service: GatewayService, faq_service: FaqService) -> None:
        """Initialize the handler.

        Args:
            gateway_service: Namespaced gateway service (required).
            faq_service: FAQ search service (required).
        """
        self._gateway = gateway_service
        self._faq = faq_service

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Handle POST /llm/chat requests.

        Raises:
            ValidationError: If message is missing or empty
            UpstreamProviderError: If the provider call failed (rendered as 502)
        """
        if not request.message:
            raise ValidationError("Message required")

        context = None
        if request.context is not None:
            context = ConversationContext(
                history=[ChatTurn(role=t.role, content=t.content) for t in request.context.history],
                data=request.context.data,
            )

        result = await self._gateway.chat(
            service=request.service or Service.DEFAULT.value,
            message=request.message,
            user_id=None if request.user_id is None else str(request.user_id),
            context=context,
        )

        return ChatResponse(
            response=ChatReply.model_validate(result.payload),
            cached=result.cached,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    async def metrics(self, hours: int | None = None) -> MetricsResponse:
        """Handle GET /llm/metrics requests."""
        window = hours or self._gateway.metrics_window_hours
        metrics = await self._gateway.metrics(window)

        return MetricsResponse(
            metrics=RequestMetrics(
                total_requests=metrics.total,
                successful=metrics.success_count,
                failed=metrics.failure_count,
                total_cost=metrics.total_cost,
                avg_tokens=metrics.avg_tokens,
            ),
            period=f"{window}h",
        )

    async def faq_search(self, query: str | None, limit: int) -> FaqSearchResponse:
        """Handle GET /llm/faq-search requests.

        Raises:
            ValidationError: If query is missing or empty
        """
        if not query:
            raise ValidationError("Query required")

        rows = await self._faq.search(query, limit)
        results = [FaqDocument.model_validate(row) for row in rows]
        return FaqSearchResponse(results=results, count=len(results))
