"""Error types for the AI gateway.

Every error carries two messages: ``message`` is for server-side logs and may
contain upstream details, ``public_message`` is the only text ever returned
to a caller.
"""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response body."""

    code: str
    message: str


class GatewayError(Exception):
    """Base exception for the AI gateway."""

    status_code: int = 500
    default_public_message: str = "Internal server error"

    def __init__(
        self,
        code: str,
        message: str,
        public_message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.public_message = public_message or self.default_public_message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to the caller-facing error body."""
        return ErrorResponse(code=self.code, message=self.public_message)


class ValidationError(GatewayError):
    """A required request field is missing."""

    status_code = 400

    def __init__(self, message: str = "Validation failed") -> None:
        # Validation messages are ours, safe to show.
        super().__init__("VALIDATION_ERROR", message, public_message=message)


class UpstreamProviderError(GatewayError):
    """The language-model provider failed, timed out, or answered garbage."""

    status_code = 502
    default_public_message = "LLM request failed"

    def __init__(self, message: str, upstream_status: int | None = None) -> None:
        super().__init__(
            "UPSTREAM_PROVIDER_ERROR",
            message,
            details={"upstream_status": upstream_status},
        )
        self.upstream_status = upstream_status


class PersistenceError(GatewayError):
    """A storage backend failed."""

    status_code = 500

    def __init__(self, message: str, public_message: str | None = None) -> None:
        super().__init__("PERSISTENCE_ERROR", message, public_message=public_message)


class CacheStoreError(PersistenceError):
    """A cache backend (Redis or the exact-match table) failed."""

    default_public_message = "Cache operation failed"


class AuditPersistenceError(PersistenceError):
    """The audit log could not be written or read."""

    default_public_message = "Failed to record request"
