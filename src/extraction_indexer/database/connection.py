"""Database engine creation and one-off schema setup."""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from extraction_indexer.config import DatabaseSettings
from extraction_indexer.database.models import Base, DocumentChunk

logger = logging.getLogger(__name__)


def create_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create and configure the SQLAlchemy async engine."""
    db_url = settings.async_url

    if db_url.startswith("sqlite"):
        # SQLite (local runs, tests) has no server-side pool to size
        engine = create_async_engine(db_url, echo=settings.echo)
    else:
        engine = create_async_engine(
            db_url,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            pool_pre_ping=True,
            echo=settings.echo,
        )
        logger.info(
            f"Database engine created: pool_size={settings.pool_size}, "
            f"max_overflow={settings.max_overflow}"
        )

    return engine


async def check_connection(engine: AsyncEngine) -> bool:
    """Check if the database answers a trivial query."""
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


async def enable_pgvector(engine: AsyncEngine) -> None:
    """Enable the pgvector extension (PostgreSQL only)."""
    if engine.dialect.name != "postgresql":
        logger.info(f"Skipping pgvector extension on dialect {engine.dialect.name}")
        return
    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
    logger.info("pgvector extension enabled")


async def create_chunk_table(engine: AsyncEngine) -> None:
    """Create ``document_chunks`` if it does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(
            lambda sync_conn: Base.metadata.create_all(
                sync_conn, tables=[DocumentChunk.__table__], checkfirst=True
            )
        )
    logger.info("document_chunks table ensured")
