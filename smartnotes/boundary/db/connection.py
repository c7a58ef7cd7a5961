"""
Async PostgreSQL connectivity.

One pooled engine per process, a session factory bound to it, and the
schema bootstrap that enables the pgvector extension before creating
the documents, document_chunks and chat_history tables.

Dependencies: sqlalchemy, asyncpg, smartnotes.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from smartnotes.boundary.db.base import Base
from smartnotes.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Process-wide async engine built from POSTGRES_* settings.

    Returns:
        AsyncEngine: Pooled engine; connections are pinged before checkout
    """
    db_config = get_settings().database
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    """
    Session factory used by PgVectorStore and ChatHistoryAdapter callers.

    Args:
        engine: Engine to bind; defaults to the process-wide engine

    Returns:
        async_sessionmaker: Factory producing sessions with explicit commits
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Enable pgvector and create every mapped table that does not exist yet.

    Args:
        engine: Target engine; defaults to the process-wide engine
    """
    # model modules register their tables on import
    import smartnotes.boundary.db.models  # noqa: F401

    async with (engine or get_async_engine()).begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
