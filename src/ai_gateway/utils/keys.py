"""Deterministic cache key derivation.

Keys are plain SHA-256 hex digests with no per-process salt, so they stay
stable across restarts and across instances sharing one cache store.
"""

import hashlib

DEFAULT_NAMESPACE = "llm_cache"


def normalize_question(question: str) -> str:
    """Lower-case and trim a question.

    Internal whitespace is left alone: "what  is apr" and "what is apr"
    are different questions.
    """
    return question.lower().strip()


def derive_exact_key(question: str) -> str:
    """Hash a question for the exact-match tier.

    Example:
        ```python
        derive_exact_key(" What is APR? ") == derive_exact_key("what is apr?")
        ```
    """
    return hashlib.sha256(normalize_question(question).encode("utf-8")).hexdigest()


def derive_service_key(service: str, message: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Build the namespaced-tier key ``<namespace>:<service>:<sha256(service:message)>``.

    The message is hashed verbatim (no normalization), together with the
    service tag so identical text under two services never collides.
    """
    digest = hashlib.sha256(f"{service}:{message}".encode("utf-8")).hexdigest()
    return f"{namespace}:{service}:{digest}"
