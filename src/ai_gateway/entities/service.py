"""Logical LLM services and their system prompts."""

from enum import Enum


class Service(str, Enum):
    """Closed set of services the gateway knows how to prompt.

    Anything else resolves to ``DEFAULT`` rather than failing.
    """

    CHATBOT = "chatbot"
    SCORE_EXPLAIN = "score_explain"
    FRAUD_SUMMARY = "fraud_summary"
    ASSISTANT = "assistant"
    DEFAULT = "default"

    @classmethod
    def resolve(cls, tag: "str | Service | None") -> "Service":
        """Map a free-form tag to a service, falling back to DEFAULT."""
        if isinstance(tag, Service):
            return tag
        try:
            return cls(tag)
        except ValueError:
            return cls.DEFAULT

    @property
    def system_prompt(self) -> str:
        return SYSTEM_PROMPTS[self]


SYSTEM_PROMPTS: dict[Service, str] = {
    Service.CHATBOT: (
        "You are a helpful banking assistant. Answer customer questions about accounts, "
        "credits, transfers, and services in Russian. Be friendly and concise. "
        "If you don't know, suggest contacting support."
    ),
    Service.SCORE_EXPLAIN: (
        "You are a financial analyst. Explain credit scoring decisions in simple, "
        "friendly Russian. Focus on key factors that influenced the score."
    ),
    Service.FRAUD_SUMMARY: (
        "You are a fraud analyst. Summarize transaction anomalies in professional "
        "Russian for internal review."
    ),
    Service.ASSISTANT: (
        "You are a personal financial advisor. Provide personalized financial "
        "recommendations in Russian based on user data. Be encouraging and practical."
    ),
    Service.DEFAULT: "You are a helpful banking assistant. Respond in Russian.",
}

if set(SYSTEM_PROMPTS) != set(Service):
    raise RuntimeError("Every Service needs a system prompt")
