"""Pydantic models shared across the pipeline."""

from extraction_indexer.models.chunk import ChunkRecord, ChunkSearchHit, TextChunk
from extraction_indexer.models.document import SourceDocument
from extraction_indexer.models.result import BackfillResult, DocumentOutcome, OutcomeStatus

__all__ = [
    "BackfillResult",
    "ChunkRecord",
    "ChunkSearchHit",
    "DocumentOutcome",
    "OutcomeStatus",
    "SourceDocument",
    "TextChunk",
]
