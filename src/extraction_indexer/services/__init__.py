"""Pipeline services."""

from extraction_indexer.services.chunk_store import ChunkStore
from extraction_indexer.services.chunking_service import BreakPointStrategy, ChunkingService, chunk_text
from extraction_indexer.services.embedding_service import EmbeddingProvider, EmbeddingService
from extraction_indexer.services.indexing_service import DocumentIndexer
from extraction_indexer.services.linearizer import linearize, linearize_text
from extraction_indexer.services.token_estimator import estimate_tokens

__all__ = [
    "BreakPointStrategy",
    "ChunkStore",
    "ChunkingService",
    "DocumentIndexer",
    "EmbeddingProvider",
    "EmbeddingService",
    "chunk_text",
    "estimate_tokens",
    "linearize",
    "linearize_text",
]
