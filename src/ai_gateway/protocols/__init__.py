"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> Memcached, OpenRouter -> another API, etc.)
- Unit testing with in-memory fakes
- Clear separation of concerns
"""

from .answer_store import AnswerStore
from .document_store import DocumentStore
from .key_value_store import KeyValueStore
from .llm_provider import LLMProvider
from .request_log_store import RequestLogStore

__all__ = [
    "AnswerStore",
    "DocumentStore",
    "KeyValueStore",
    "LLMProvider",
    "RequestLogStore",
]
