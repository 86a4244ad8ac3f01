"""Provider call domain entities."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ChatTurn:
    """A single prior conversation turn."""

    role: str
    content: str


@dataclass(frozen=True)
class ConversationContext:
    """Optional extras for a provider call.

    Attributes:
        history: Prior turns, oldest first
        data: Structured data appended to the final user turn as JSON
    """

    history: list[ChatTurn] = field(default_factory=list)
    data: Any = None


@dataclass(frozen=True)
class ProviderReply:
    """Normalized provider response with its cost estimate."""

    text: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    model: str
    cost: float

    def to_payload(self) -> dict[str, Any]:
        """Shape used both in the namespaced cache and in API responses."""
        return {
            "message": self.text,
            "tokens": self.total_tokens,
            "model": self.model,
            "cost": self.cost,
        }


_PAYLOAD_FIELDS: dict[str, tuple[type, ...]] = {
    "message": (str,),
    "tokens": (int,),
    "model": (str,),
    "cost": (int, float),
}


def is_reply_payload(value: Any) -> bool:
    """Check that a cached value still has the ``to_payload`` shape.

    Entries written by an older release, or by hand, may carry a different
    shape; those must be treated as unreadable rather than served.
    """
    if not isinstance(value, dict):
        return False
    for name, types in _PAYLOAD_FIELDS.items():
        field_value = value.get(name)
        if isinstance(field_value, bool) or not isinstance(field_value, types):
            return False
    return True
