"""HTTP handlers for the exact-match tier.

Handlers convert between DTOs (API contracts) and service calls. Domain
errors are left to propagate; the app turns them into JSON error bodies.
"""

from ai_gateway.dto import AskRequest, AskResponse, CacheStatsResponse, MessageResponse
from ai_gateway.errors import ValidationError
from ai_gateway.services import AskService


class AskHandler:
    """HTTP handlers for POST /ask, GET /cache/stats and DELETE /cache.

    Example:
        ```python
        handler = AskHandler(ask_service=AskService(cache=cache, provider=provider))

        @app.post("/ask", response_model=AskResponse)
        async def ask(request: AskRequest):
            return await handler.ask(request)
        ```
    """

    def __init__(self, ask_service: AskService) -> None:
        """Initialize the ask handler.

        Args:
            ask_service: The exact-match service (required).
        """
        self._service = ask_service

    async def ask(self, request: AskRequest) -> AskResponse:
        """Handle POST /ask requests.

        Raises:
            ValidationError: If userId or question is missing or empty
        """
        if request.user_id in (None, "") or not request.question:
            raise ValidationError("userId and question required")

        result = await self._service.ask(str(request.user_id), request.question)

        return AskResponse(
            answer=result.answer,
            cached=result.cached,
            question_hash=result.question_hash,
        )

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests."""
        stats = await self._service.stats()

        return CacheStatsResponse(
            total_cached_responses=stats.total_cached_responses,
            unique_questions=stats.unique_questions,
        )

    async def clear_cache(self) -> MessageResponse:
        """Handle DELETE /cache requests."""
        await self._service.clear()
        return MessageResponse(message="AI cache cleared")
