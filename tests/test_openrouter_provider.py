"""
Tests for the OpenRouter provider adapter.
"""

import json

import httpx
import pytest

from ai_gateway.entities import ChatTurn, ConversationContext, Service
from ai_gateway.errors import UpstreamProviderError
from ai_gateway.repositories import OpenRouterProvider, build_messages, estimate_cost

BASE_URL = "https://llm.test/api/v1"


def completion_body(content="Ответ", prompt_tokens=100, completion_tokens=50, model="openai/gpt-4o-mini"):
    return {
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
        "model": model,
    }


class Recorder:
    """MockTransport handler that records requests and replays a canned response."""

    def __init__(self, response=None, exc=None):
        self.requests: list[httpx.Request] = []
        self.response = response
        self.exc = exc

    def __call__(self, request):
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return self.response

    @property
    def last_body(self):
        return json.loads(self.requests[-1].content)


def make_provider(recorder):
    return OpenRouterProvider(
        api_key="test-key",
        model_name="openrouter/auto",
        base_url=BASE_URL,
        price_input=0.00001,
        price_output=0.00002,
        timeout=30,
        temperature=0.7,
        max_tokens=1000,
        client=httpx.AsyncClient(transport=httpx.MockTransport(recorder)),
    )


def test_cost_formula():
    assert estimate_cost(100, 50, 0.00001, 0.00002) == pytest.approx(0.002)


def test_messages_without_context():
    messages = build_messages(Service.CHATBOT, "Hello")
    assert messages == [
        {"role": "system", "content": Service.CHATBOT.system_prompt},
        {"role": "user", "content": "Hello"},
    ]


def test_messages_history_and_data_suffix():
    context = ConversationContext(
        history=[ChatTurn("user", "first"), ChatTurn("assistant", "second")],
        data={"score": 640, "city": "Москва"},
    )
    messages = build_messages(Service.SCORE_EXPLAIN, "Why?", context)

    assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
    assert messages[1]["content"] == "first"
    assert messages[2]["content"] == "second"
    assert messages[-1]["content"] == 'Why?\n\nContext: {"score":640,"city":"Москва"}'


def test_messages_empty_data_adds_no_suffix():
    messages = build_messages(Service.DEFAULT, "Hi", ConversationContext(data={}))
    assert messages[-1]["content"] == "Hi"


def test_unknown_service_resolves_to_default():
    assert Service.resolve("crypto_wizard") is Service.DEFAULT
    assert Service.resolve(None) is Service.DEFAULT
    assert Service.resolve("fraud_summary") is Service.FRAUD_SUMMARY


def test_every_service_has_a_prompt():
    for service in Service:
        assert service.system_prompt


@pytest.mark.asyncio
async def test_invoke_success():
    recorder = Recorder(httpx.Response(200, json=completion_body()))
    provider = make_provider(recorder)

    reply = await provider.invoke("chatbot", "Что такое KYC?")

    assert reply.text == "Ответ"
    assert reply.prompt_tokens == 100
    assert reply.completion_tokens == 50
    assert reply.total_tokens == 150
    assert reply.model == "openai/gpt-4o-mini"
    assert reply.cost == pytest.approx(0.002)

    request = recorder.requests[0]
    assert str(request.url) == f"{BASE_URL}/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert "X-Title" in request.headers
    body = recorder.last_body
    assert body["model"] == "openrouter/auto"
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 1000
    assert body["messages"][0]["content"] == Service.CHATBOT.system_prompt


@pytest.mark.asyncio
async def test_invoke_unknown_service_uses_default_prompt():
    recorder = Recorder(httpx.Response(200, json=completion_body()))
    provider = make_provider(recorder)

    await provider.invoke("crypto_wizard", "Hi")

    assert recorder.last_body["messages"][0]["content"] == Service.DEFAULT.system_prompt


@pytest.mark.asyncio
async def test_invoke_non_2xx_fails_once():
    recorder = Recorder(httpx.Response(429, json={"error": {"message": "rate limited"}}))
    provider = make_provider(recorder)

    with pytest.raises(UpstreamProviderError) as exc_info:
        await provider.invoke("chatbot", "Hi")

    assert exc_info.value.upstream_status == 429
    assert "rate limited" in exc_info.value.message
    assert exc_info.value.public_message == "LLM request failed"
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_invoke_timeout_fails_once():
    recorder = Recorder(exc=httpx.ReadTimeout("timed out"))
    provider = make_provider(recorder)

    with pytest.raises(UpstreamProviderError, match="timed out"):
        await provider.invoke("chatbot", "Hi")

    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_invoke_connection_error():
    recorder = Recorder(exc=httpx.ConnectError("connection refused"))
    provider = make_provider(recorder)

    with pytest.raises(UpstreamProviderError):
        await provider.invoke("chatbot", "Hi")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"choices": [{"message": {"content": None}}], "usage": {"prompt_tokens": 1, "completion_tokens": 0}}),
        httpx.Response(200, text="<html>bad gateway</html>"),
    ],
)
async def test_invoke_malformed_body(response):
    provider = make_provider(Recorder(response))

    with pytest.raises(UpstreamProviderError):
        await provider.invoke("chatbot", "Hi")


@pytest.mark.asyncio
async def test_invoke_missing_total_tokens_sums_usage():
    body = completion_body()
    del body["usage"]["total_tokens"]
    del body["model"]
    provider = make_provider(Recorder(httpx.Response(200, json=body)))

    reply = await provider.invoke("assistant", "Hi")

    assert reply.total_tokens == 150
    assert reply.model == "openrouter/auto"
