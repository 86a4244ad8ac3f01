"""Audit log domain entities."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RequestStatus(str, Enum):
    """Outcome of a provider request."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ProviderRequestLogEntity:
    """One append-only audit row per provider request.

    Attributes:
        user_id: Caller, when supplied
        service: The service tag as requested (unknown tags are kept verbatim)
        prompt_text: The user message sent upstream
        response_text: Serialized reply; None on failure
        cost_estimate: Estimated USD cost; None on failure
        tokens_used: Total tokens; None on failure, so averages skip it
        status: success or error
        error_message: Upstream error text, server-side only
        created_at: Set by the store when None
    """

    service: str
    prompt_text: str
    status: RequestStatus
    user_id: str | None = None
    response_text: str | None = None
    cost_estimate: float | None = None
    tokens_used: int | None = None
    error_message: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class RequestMetricsEntity:
    """Aggregates over the audit log for a trailing window."""

    total: int
    success_count: int
    failure_count: int
    total_cost: float
    avg_tokens: float
