"""Audit log storage protocol."""

from typing import Protocol, runtime_checkable

from ai_gateway.entities import ProviderRequestLogEntity, RequestMetricsEntity


@runtime_checkable
class RequestLogStore(Protocol):
    """Protocol for the append-only provider request log.

    ``record`` must either persist the row or raise ``AuditPersistenceError``;
    it is never allowed to fail silently.
    """

    async def record(self, entry: ProviderRequestLogEntity) -> None:
        """Persist one audit row."""
        ...

    async def metrics(self, window_hours: int) -> RequestMetricsEntity:
        """Aggregate rows created within the trailing ``window_hours``."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...
