"""PostgreSQL implementation of RequestLogStore (the ``ai_requests`` table)."""

import asyncpg

from ai_gateway.entities import ProviderRequestLogEntity, RequestMetricsEntity
from ai_gateway.errors import AuditPersistenceError

from .postgres_schema import DB_ERRORS


class PostgresRequestLogRepository:
    """Append-only audit log.

    Failures are never swallowed here: a row that cannot be written surfaces
    as ``AuditPersistenceError`` so the request fails instead of silently
    losing its audit record.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def record(self, entry: ProviderRequestLogEntity) -> None:
        """Insert one audit row.

        Args:
            entry: The row to persist; ``created_at`` defaults to NOW()

        Raises:
            AuditPersistenceError: If the insert fails
        """
        try:
            await self._pool.execute(
                """
                INSERT INTO ai_requests (
                    user_id, service, prompt_text, model_response,
                    cost_estimate, tokens_used, status, error_message, created_at
                ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, COALESCE($9, NOW()))
                """,
                entry.user_id,
                entry.service,
                entry.prompt_text,
                entry.response_text,
                entry.cost_estimate,
                entry.tokens_used,
                entry.status.value,
                entry.error_message,
                entry.created_at,
            )
        except DB_ERRORS as e:
            raise AuditPersistenceError(f"ai_requests insert failed: {e}") from e

    async def metrics(self, window_hours: int) -> RequestMetricsEntity:
        """Aggregate the trailing window.

        Args:
            window_hours: Only rows with ``created_at`` newer than NOW() minus
                this many hours are counted

        Returns:
            RequestMetricsEntity; an empty window yields zeros
        """
        try:
            row = await self._pool.fetchrow(
                """
                SELECT
                    COUNT(*) AS total_requests,
                    COUNT(*) FILTER (WHERE status = 'success') AS successful,
                    COUNT(*) FILTER (WHERE status = 'error') AS failed,
                    COALESCE(SUM(cost_estimate), 0) AS total_cost,
                    COALESCE(AVG(tokens_used), 0) AS avg_tokens
                FROM ai_requests
                WHERE created_at > NOW() - make_interval(hours => $1)
                """,
                window_hours,
            )
        except DB_ERRORS as e:
            raise AuditPersistenceError(
                f"ai_requests metrics failed: {e}",
                public_message="Failed to fetch metrics",
            ) from e

        return RequestMetricsEntity(
            total=int(row["total_requests"]),
            success_count=int(row["successful"]),
            failure_count=int(row["failed"]),
            total_cost=float(row["total_cost"]),
            avg_tokens=float(row["avg_tokens"]),
        )

    async def health_check(self) -> bool:
        try:
            return await self._pool.fetchval("SELECT 1") == 1
        except DB_ERRORS:
            return False
