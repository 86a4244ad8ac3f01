"""OpenRouter-based LLM provider.

Uses OpenRouter's OpenAI-compatible chat completions API. One call per
request, no retries: every upstream call is billed, so a failed request is
reported to the caller instead of being repeated.

Request:
    {model, messages: [{role, content}], temperature, max_tokens}

Response (fields used):
    {choices: [{message: {content}}], usage: {prompt_tokens, completion_tokens,
    total_tokens}, model}
"""

import asyncio
import json
from typing import Any

import httpx

from ai_gateway.config import settings
from ai_gateway.entities import ConversationContext, ProviderReply, Service
from ai_gateway.errors import UpstreamProviderError


def build_messages(
    service: Service,
    message: str,
    context: ConversationContext | None = None,
) -> list[dict[str, str]]:
    """Assemble the chat turns sent upstream.

    Order is: system prompt, prior history (oldest first), new user turn.
    Structured ``context.data`` is not a turn of its own; it is appended to
    the final user turn as ``"\\n\\nContext: <json>"``.
    """
    messages = [{"role": "system", "content": service.system_prompt}]

    if context is not None:
        messages.extend({"role": turn.role, "content": turn.content} for turn in context.history)

    content = message
    if context is not None and context.data:
        serialized = json.dumps(context.data, ensure_ascii=False, separators=(",", ":"))
        content = f"{content}\n\nContext: {serialized}"
    messages.append({"role": "user", "content": content})

    return messages


def estimate_cost(
    prompt_tokens: int,
    completion_tokens: int,
    price_input: float,
    price_output: float,
) -> float:
    """cost = prompt_tokens * price_input + completion_tokens * price_output"""
    return prompt_tokens * price_input + completion_tokens * price_output


class OpenRouterProvider:
    """OpenRouter implementation of the LLMProvider protocol.

    This class satisfies the LLMProvider protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        provider = OpenRouterProvider.create()
        reply = await provider.invoke("score_explain", "Why was my score 640?")
        print(reply.text, reply.total_tokens, reply.cost)
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        base_url: str | None = None,
        price_input: float | None = None,
        price_output: float | None = None,
        timeout: float | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the OpenRouter provider.

        Args:
            api_key: OpenRouter API key. Defaults to settings.openrouter_api_key.
            model_name: Model identifier. Defaults to settings.openrouter_model.
            base_url: API base URL. Defaults to settings.openrouter_base_url.
            price_input: USD per prompt token. Defaults to settings.llm_price_input.
            price_output: USD per completion token. Defaults to settings.llm_price_output.
            timeout: Overall request timeout in seconds. Defaults to settings.llm_timeout.
            temperature: Sampling temperature. Defaults to settings.llm_temperature.
            max_tokens: Completion token cap. Defaults to settings.llm_max_tokens.
            client: Pre-built HTTP client (tests inject a MockTransport here).
        """
        self._api_key = api_key if api_key is not None else settings.openrouter_api_key
        self._model_name = model_name or settings.openrouter_model
        self._base_url = (base_url or settings.openrouter_base_url).rstrip("/")
        self._price_input = settings.llm_price_input if price_input is None else price_input
        self._price_output = settings.llm_price_output if price_output is None else price_output
        self._timeout = timeout or settings.llm_timeout
        self._temperature = settings.llm_temperature if temperature is None else temperature
        self._max_tokens = max_tokens or settings.llm_max_tokens
        self._client = client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
    ) -> "OpenRouterProvider":
        """Factory method to create OpenRouterProvider with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            base_url: OpenRouter API URL. If None, uses settings.

        Returns:
            Configured OpenRouterProvider
        """
        return cls(model_name=model_name, base_url=base_url)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def model_name(self) -> str:
        return self._model_name

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key or ''}",
            "HTTP-Referer": settings.app_referer,
            "X-Title": settings.app_title,
        }

    async def invoke(
        self,
        service: str | Service,
        message: str,
        context: ConversationContext | None = None,
    ) -> ProviderReply:
        """Call the chat completions endpoint once.

        Args:
            service: Service tag; unknown tags use the default system prompt
            message: The new user message
            context: Optional history and structured data

        Returns:
            ProviderReply with text, token usage, model and cost estimate

        Raises:
            UpstreamProviderError: On timeout, non-2xx status, or malformed body
        """
        payload = {
            "model": self._model_name,
            "messages": build_messages(Service.resolve(service), message, context),
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

        try:
            response = await asyncio.wait_for(
                self.client.post(
                    f"{self._base_url}/chat/completions",
                    json=payload,
                    headers=self._headers(),
                ),
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise UpstreamProviderError(f"LLM API timed out after {self._timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise UpstreamProviderError(
                f"LLM API failed: HTTP {e.response.status_code}: {e.response.text[:500]}",
                upstream_status=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamProviderError(f"LLM API failed: {e}") from e
        except ValueError as e:
            raise UpstreamProviderError(f"LLM API returned invalid JSON: {e}") from e

        return self._parse_reply(data)

    def _parse_reply(self, data: Any) -> ProviderReply:
        try:
            text = data["choices"][0]["message"]["content"]
            usage = data["usage"]
            prompt_tokens = int(usage["prompt_tokens"])
            completion_tokens = int(usage["completion_tokens"])
            total_tokens = int(usage.get("total_tokens", prompt_tokens + completion_tokens))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise UpstreamProviderError(f"Unexpected LLM API response format: {e!r}") from e

        if text is None:
            raise UpstreamProviderError("LLM API returned an empty completion")

        return ProviderReply(
            text=text,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=total_tokens,
            model=data.get("model") or self._model_name,
            cost=estimate_cost(
                prompt_tokens, completion_tokens, self._price_input, self._price_output
            ),
        )

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
