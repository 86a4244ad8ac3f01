"""Request DTOs for API endpoints.

Field names are snake_case in Python and camelCase on the wire. Required
fields are declared optional here so that a missing field reaches the
handler and is rejected with a 400 naming it.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AskRequest(CamelModel):
    """Request DTO for the exact-match tier."""

    user_id: str | int | None = Field(None, description="The asking user")
    question: str | None = Field(None, description="Question text")


class ChatTurnItem(BaseModel):
    """A prior conversation turn."""

    role: str = Field(..., description="system, user or assistant")
    content: str


class ChatContext(BaseModel):
    """Optional extras for a gateway call."""

    model_config = ConfigDict(extra="allow")

    history: list[ChatTurnItem] = Field(
        default_factory=list,
        description="Prior turns, oldest first",
    )
    data: Any = Field(None, description="Structured data appended to the user turn as JSON")


class ChatRequest(CamelModel):
    """Request DTO for the namespaced gateway."""

    user_id: str | int | None = Field(None, description="Caller, recorded in the audit log")
    service: str | None = Field(
        "default",
        description="chatbot, score_explain, fraud_summary or assistant; anything else uses the default prompt",
    )
    message: str | None = Field(None, description="The user message")
    context: ChatContext | None = None
