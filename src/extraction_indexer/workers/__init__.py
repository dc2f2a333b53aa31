"""Background jobs."""

from extraction_indexer.workers.backfill import BackfillOrchestrator

__all__ = ["BackfillOrchestrator"]
