"""Language-model provider protocol."""

from typing import Protocol, runtime_checkable

from ai_gateway.entities import ConversationContext, ProviderReply, Service


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for language-model providers.

    Example:
        ```python
        provider: LLMProvider = OpenRouterProvider.create()
        reply = await provider.invoke("chatbot", "What is APR?")
        print(reply.text, reply.cost)
        ```
    """

    @property
    def model_name(self) -> str:
        """Return the configured model identifier."""
        ...

    async def invoke(
        self,
        service: str | Service,
        message: str,
        context: ConversationContext | None = None,
    ) -> ProviderReply:
        """Make exactly one upstream call.

        Raises:
            UpstreamProviderError: On timeout, non-2xx status, or a malformed body
        """
        ...
