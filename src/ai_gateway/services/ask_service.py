"""Exact-match question answering.

Cache-aside over the durable exact-match tier. When the provider fails, a
fixed apology is returned *and cached*, so repeated questions do not keep
hitting a failing provider. A transient outage can therefore leave the
apology cached for that question until the cache is cleared.
"""

from dataclasses import dataclass

from ai_gateway.config import settings
from ai_gateway.entities import CacheStatsEntity
from ai_gateway.errors import UpstreamProviderError
from ai_gateway.logging import get_logger
from ai_gateway.protocols import LLMProvider
from ai_gateway.utils import derive_exact_key, run_shielded

from .tiered_cache import TieredCache

logger = get_logger(__name__)

FALLBACK_ANSWER = (
    "Извините, я не смог обработать ваш вопрос. "
    "Пожалуйста, попробуйте позже или свяжитесь с поддержкой."
)


@dataclass(frozen=True)
class AskResult:
    answer: str
    cached: bool
    question_hash: str


class AskService:
    """Answer questions through the exact-match cache.

    There is no single-flight: two identical questions arriving together both
    miss and both call the provider. The second insert is ignored by the store.
    """

    def __init__(
        self,
        cache: TieredCache,
        provider: LLMProvider,
        service: str | None = None,
    ) -> None:
        """Initialize the ask service.

        Args:
            cache: Tiered cache (required).
            provider: LLM provider (required).
            service: Service tag used for the provider call. Defaults to settings.
        """
        self._cache = cache
        self._provider = provider
        self._service = service or settings.ask_service

    async def ask(self, user_id: str, question: str) -> AskResult:
        """Answer a question, from cache when possible.

        Args:
            user_id: The asking user
            question: Question text as typed

        Returns:
            AskResult; ``cached`` is True only when served from the store
        """
        question_hash = derive_exact_key(question)

        answer = await self._cache.lookup_exact(question_hash)
        if answer is not None:
            logger.info("cache_hit", tier="exact", question=question[:50])
            return AskResult(answer=answer, cached=True, question_hash=question_hash)

        logger.info("cache_miss", tier="exact", question=question[:50])
        # The caller going away must not abort the provider call or the cache write
        return await run_shielded(self._answer_fresh(user_id, question, question_hash), tier="exact")

    async def _answer_fresh(self, user_id: str, question: str, question_hash: str) -> AskResult:
        try:
            reply = await self._provider.invoke(self._service, question)
            answer = reply.text
        except UpstreamProviderError as e:
            logger.error("provider_call_failed", tier="exact", error=e.message)
            answer = FALLBACK_ANSWER

        await self._cache.write_exact(question_hash, question, answer, user_id=user_id)
        return AskResult(answer=answer, cached=False, question_hash=question_hash)

    async def stats(self) -> CacheStatsEntity:
        """Count the cached answers.

        Returns:
            CacheStatsEntity with total and distinct-question counts

        Raises:
            CacheStoreError: If the answer store is unavailable
        """
        return await self._cache.exact_stats()

    async def clear(self) -> None:
        """Delete every cached answer.

        Raises:
            CacheStoreError: If the answer store is unavailable
        """
        await self._cache.clear_exact()
