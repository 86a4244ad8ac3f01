"""PostgreSQL schema bootstrap and shared error handling."""

import asyncio

import asyncpg

from ai_gateway.logging import get_logger

logger = get_logger(__name__)

# Anything a pool call can raise when the database misbehaves
DB_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncio.TimeoutError,
    OSError,
)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS ai_cache (
        id BIGSERIAL PRIMARY KEY,
        user_id TEXT,
        question_hash CHAR(64) NOT NULL UNIQUE,
        question_original TEXT NOT NULL,
        answer TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ai_requests (
        id BIGSERIAL PRIMARY KEY,
        user_id TEXT,
        service TEXT NOT NULL,
        prompt_text TEXT,
        model_response TEXT,
        cost_estimate NUMERIC(14, 8),
        tokens_used INTEGER,
        status TEXT NOT NULL CHECK (status IN ('success', 'error')),
        error_message TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    # Tables created before failed requests stored NULL usage
    "ALTER TABLE ai_requests ALTER COLUMN cost_estimate DROP NOT NULL, ALTER COLUMN cost_estimate DROP DEFAULT",
    "ALTER TABLE ai_requests ALTER COLUMN tokens_used DROP NOT NULL, ALTER COLUMN tokens_used DROP DEFAULT",
    "CREATE INDEX IF NOT EXISTS idx_ai_requests_created_at ON ai_requests (created_at)",
    """
    CREATE TABLE IF NOT EXISTS documents (
        id BIGSERIAL PRIMARY KEY,
        title TEXT NOT NULL,
        content TEXT NOT NULL,
        category TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_documents_content_fts
        ON documents USING GIN (to_tsvector('russian', content))
    """,
)


async def ensure_schema(pool: asyncpg.Pool) -> None:
    """Create the gateway tables if they do not exist yet."""
    async with pool.acquire() as conn:
        async with conn.transaction():
            for statement in SCHEMA_STATEMENTS:
                await conn.execute(statement)
    logger.info("schema_ready", tables=["ai_cache", "ai_requests", "documents"])
