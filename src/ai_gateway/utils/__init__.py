"""Utility modules for the AI gateway."""

from .keys import derive_exact_key, derive_service_key, normalize_question
from .tasks import run_shielded

__all__ = [
    "derive_exact_key",
    "derive_service_key",
    "normalize_question",
    "run_shielded",
]
