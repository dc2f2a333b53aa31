"""Database engine, sessions, ORM models and repositories."""

from extraction_indexer.database.connection import (
    check_connection,
    create_chunk_table,
    create_engine,
    enable_pgvector,
)
from extraction_indexer.database.models import (
    Base,
    Document,
    DocumentChunk,
    DocumentExtraction,
    ProcessingStatus,
)
from extraction_indexer.database.repositories import ChunkRepository, DocumentRepository
from extraction_indexer.database.session import create_session_factory, get_session

__all__ = [
    "Base",
    "ChunkRepository",
    "Document",
    "DocumentChunk",
    "DocumentExtraction",
    "DocumentRepository",
    "ProcessingStatus",
    "check_connection",
    "create_chunk_table",
    "create_engine",
    "create_session_factory",
    "enable_pgvector",
    "get_session",
]
