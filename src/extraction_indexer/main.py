"""Command-line entry point for the chunk backfill job.

Usage:
    extraction-indexer-backfill
    extraction-indexer-backfill --limit 50
    extraction-indexer-backfill --init-db --log-level DEBUG
    python -m extraction_indexer --limit 50
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from extraction_indexer.config import Settings, get_settings
from extraction_indexer.models.result import BackfillResult
from extraction_indexer.utils.errors import ConfigurationError, OrchestrationError
from extraction_indexer.utils.logging import get_logger, log_error, setup_logging

logger = get_logger("main")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the backfill command."""
    parser = argparse.ArgumentParser(
        prog="extraction-indexer-backfill",
        description="Chunk and embed completed documents that have no chunks yet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Backfill every eligible document
  extraction-indexer-backfill

  # Only look at the first 50 eligible documents
  extraction-indexer-backfill --limit 50

  # Create the pgvector extension and document_chunks table first
  extraction-indexer-backfill --init-db
        """,
    )

    parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Maximum number of eligible documents to process (default: all)",
    )

    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Enable pgvector and create the document_chunks table before running",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Override LOG_LEVEL for this run",
    )

    return parser


def load_settings(limit: Optional[int] = None) -> Settings:
    """
    Load settings from the environment, applying command-line overrides.

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    try:
        settings = get_settings()
    except (ValidationError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    if limit is not None:
        settings = settings.model_copy(
            update={"backfill": settings.backfill.model_copy(update={"limit": limit})}
        )
    return settings


async def run_backfill(settings: Settings, init_db: bool = False) -> BackfillResult:
    """
    Wire the pipeline from *settings* and run one backfill pass.

    The engine is created here and disposed when the run ends, whatever the
    outcome.
    """
    # ORM models read settings at import time, so load them after get_settings()
    from extraction_indexer.database.connection import (
        create_chunk_table,
        create_engine,
        enable_pgvector,
    )
    from extraction_indexer.database.session import create_session_factory
    from extraction_indexer.services.chunk_store import ChunkStore
    from extraction_indexer.services.chunking_service import ChunkingService
    from extraction_indexer.services.embedding_service import EmbeddingService
    from extraction_indexer.services.indexing_service import DocumentIndexer
    from extraction_indexer.workers.backfill import BackfillOrchestrator

    engine = create_engine(settings.database)
    try:
        if init_db:
            try:
                await enable_pgvector(engine)
                await create_chunk_table(engine)
            except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
                raise OrchestrationError(f"Failed to prepare database schema: {e}") from e

        session_factory = create_session_factory(engine)
        store = ChunkStore(session_factory)
        indexer = DocumentIndexer(
            chunker=ChunkingService.from_settings(settings.chunking),
            embedder=EmbeddingService.from_settings(settings.embedding),
            store=store,
        )
        orchestrator = BackfillOrchestrator(
            session_factory=session_factory,
            indexer=indexer,
            store=store,
            settings=settings.backfill,
        )

        logger.info(
            f"Starting chunk backfill: status={settings.backfill.eligible_status}, "
            f"limit={settings.backfill.limit}, chunk_size={settings.chunking.chunk_size}, "
            f"overlap={settings.chunking.chunk_overlap}"
        )
        return await orchestrator.run()
    finally:
        await engine.dispose()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the backfill and return the process exit code.

    Per-document failures are reported in the summary and still exit 0. Only a
    run that could not start or could not list documents exits 1.
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(limit=args.limit)
    except ConfigurationError as e:
        setup_logging(args.log_level or "INFO")
        log_error(logger, "Configuration error", e)
        return 1

    setup_logging(args.log_level or settings.log_level)

    try:
        result = asyncio.run(run_backfill(settings, init_db=args.init_db))
    except (OrchestrationError, ConfigurationError) as e:
        log_error(logger, "Chunk backfill aborted", e)
        return 1

    if result.has_failures:
        failed_ids = ", ".join(outcome.document_id for outcome in result.failures)
        logger.warning(f"Documents failed during backfill: {failed_ids}")
    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())
