"""
Shared fixtures: in-memory fakes satisfying the storage and provider protocols.
"""

import asyncio
from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

from ai_gateway.api.app import create_app
from ai_gateway.api.dependencies import install, uninstall
from ai_gateway.entities import (
    CachedAnswerEntity,
    CacheStatsEntity,
    ProviderReply,
    ProviderRequestLogEntity,
    RequestMetricsEntity,
    RequestStatus,
)
from ai_gateway.errors import AuditPersistenceError, CacheStoreError, UpstreamProviderError
from ai_gateway.services import AskService, FaqService, GatewayService, TieredCache


class FakeAnswerStore:
    def __init__(self):
        self.rows: dict[str, CachedAnswerEntity] = {}
        self.fail_reads = False
        self.fail_writes = False

    async def get_answer(self, question_hash):
        if self.fail_reads:
            raise CacheStoreError("ai_cache lookup failed: connection refused")
        entry = self.rows.get(question_hash)
        return entry.answer if entry else None

    async def insert_answer(self, entry):
        if self.fail_writes:
            raise CacheStoreError("ai_cache insert failed: connection refused")
        self.rows.setdefault(entry.question_hash, entry)

    async def get_stats(self):
        return CacheStatsEntity(
            total_cached_responses=len(self.rows),
            unique_questions=len(set(self.rows)),
        )

    async def clear_all(self):
        self.rows.clear()

    async def health_check(self):
        return not self.fail_reads


class FakeKeyValueStore:
    """Never expires anything on its own; expiry must be enforced by the caller."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail = False

    async def get(self, key):
        if self.fail:
            raise CacheStoreError("Redis GET failed: connection refused")
        return self.data.get(key)

    async def set(self, key, value):
        if self.fail:
            raise CacheStoreError("Redis SET failed: connection refused")
        self.data[key] = value

    async def set_with_expiry(self, key, value, ttl_seconds):
        if self.fail:
            raise CacheStoreError("Redis SETEX failed: connection refused")
        self.data[key] = value
        self.ttls[key] = ttl_seconds

    async def health_check(self):
        return not self.fail


class FakeRequestLog:
    def __init__(self):
        self.rows: list[ProviderRequestLogEntity] = []
        self.windows: list[int] = []
        self.fail = False

    async def record(self, entry):
        if self.fail:
            raise AuditPersistenceError("ai_requests insert failed: disk full")
        self.rows.append(entry)

    async def metrics(self, window_hours):
        self.windows.append(window_hours)
        successes = [r for r in self.rows if r.status is RequestStatus.SUCCESS]
        # NULL usage columns are skipped, as SUM and AVG do in SQL
        tokens = [r.tokens_used for r in self.rows if r.tokens_used is not None]
        return RequestMetricsEntity(
            total=len(self.rows),
            success_count=len(successes),
            failure_count=len(self.rows) - len(successes),
            total_cost=sum(r.cost_estimate for r in self.rows if r.cost_estimate is not None),
            avg_tokens=(sum(tokens) / len(tokens)) if tokens else 0.0,
        )

    async def health_check(self):
        return not self.fail


class FakeProvider:
    """Records every call; optionally blocks on ``gate`` or raises ``error``."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.reply = ProviderReply(
            text="KYC означает «знай своего клиента».",
            prompt_tokens=100,
            completion_tokens=50,
            total_tokens=150,
            model="openrouter/test-model",
            cost=0.002,
        )
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None

    @property
    def model_name(self):
        return "openrouter/test-model"

    async def invoke(self, service, message, context=None):
        self.calls.append((service, message, context))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply

    def fail_with(self, message="LLM API failed: HTTP 503: upstream overloaded"):
        self.error = UpstreamProviderError(message, upstream_status=503)


class FakeDocumentStore:
    def __init__(self):
        self.documents = [
            {"title": "Кредитная карта", "content": "Как оформить кредитную карту", "category": "cards"},
            {"title": "Вклады", "content": "Условия по вкладам", "category": "deposits"},
        ]
        self.queries: list[tuple[str, int]] = []

    async def search(self, query, limit):
        self.queries.append((query, limit))
        return self.documents[:limit]


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def answer_store():
    return FakeAnswerStore()


@pytest.fixture
def kv_store():
    return FakeKeyValueStore()


@pytest.fixture
def request_log():
    return FakeRequestLog()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def documents():
    return FakeDocumentStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(answer_store, kv_store, clock):
    return TieredCache(answer_store=answer_store, kv_store=kv_store, ttl=86400, clock=clock)


@pytest.fixture
def ask_service(cache, provider):
    return AskService(cache=cache, provider=provider, service="chatbot")


@pytest.fixture
def gateway_service(cache, provider, request_log):
    return GatewayService(
        cache=cache,
        provider=provider,
        request_log=request_log,
        namespace="llm_cache",
        metrics_window_hours=24,
    )


@pytest.fixture
def client(cache, ask_service, gateway_service, documents):
    """Create a test client wired to the in-memory fakes."""

    @asynccontextmanager
    async def fake_lifespan(app):
        install(
            app,
            cache=cache,
            ask_service=ask_service,
            gateway_service=gateway_service,
            faq_service=FaqService(documents),
        )
        yield
        uninstall(app)

    with TestClient(create_app(fake_lifespan)) as test_client:
        yield test_client
