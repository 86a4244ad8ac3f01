"""Exact-match cache domain entities."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CachedAnswerEntity:
    """A durable exact-match cache row.

    Rows are append-only: once a question hash has an answer it is never
    updated, and a second insert for the same hash is a no-op.

    Attributes:
        question_hash: SHA-256 of the normalized question (primary lookup key)
        question_original: The question exactly as the user typed it
        answer: The text returned to the caller
        user_id: Who asked first, if known
        created_at: Insertion time; None until the store assigns it
    """

    question_hash: str
    question_original: str
    answer: str
    user_id: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class CacheStatsEntity:
    """Counts over the exact-match store."""

    total_cached_responses: int
    unique_questions: int
