"""Transactional persistence of a document's chunk set."""

from typing import List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from extraction_indexer.database.models import DocumentChunk
from extraction_indexer.database.repositories import ChunkRepository
from extraction_indexer.models.chunk import ChunkRecord, ChunkSearchHit, TextChunk
from extraction_indexer.utils.errors import PersistenceError
from extraction_indexer.utils.logging import get_logger

logger = get_logger("chunk_store")


def _to_record(row: DocumentChunk) -> ChunkRecord:
    return ChunkRecord(
        id=row.id,
        document_id=row.document_id,
        content=row.content,
        position=row.position,
        token_count=row.token_count,
        embedding=[float(x) for x in row.embedding] if row.embedding is not None else [],
        created_at=row.created_at,
    )


class ChunkStore:
    """
    Store chunks in ``document_chunks``.

    A document's chunk set is only ever replaced as a whole: the delete of the
    old rows and the insert of the new ones share one transaction, so readers
    see either the complete old set or the complete new set.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def replace(
        self,
        document_id: str,
        chunks: Sequence[TextChunk],
        vectors: Sequence[Sequence[float]],
    ) -> List[ChunkRecord]:
        """
        Replace every chunk of *document_id* with *chunks*.

        Positions are assigned 0..N-1 in the given order. An empty *chunks*
        still deletes the existing rows.

        Raises:
            PersistenceError: if the input is inconsistent or the transaction
                fails (nothing is changed in that case)
        """
        if len(chunks) != len(vectors):
            raise PersistenceError(
                "Chunks and embeddings length mismatch",
                document_id=document_id,
                details={"chunks": len(chunks), "embeddings": len(vectors)},
            )

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    repo = ChunkRepository(session)
                    deleted = await repo.delete_for_document(document_id)
                    rows = await repo.add_all(document_id, chunks, vectors)
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to replace chunks: {e}", document_id=document_id
            ) from e

        logger.info(
            f"Chunks replaced: document_id={document_id}, deleted={deleted}, inserted={len(rows)}"
        )
        return [_to_record(row) for row in rows]

    async def count(self, document_id: str) -> int:
        """Count persisted chunks for *document_id*."""
        try:
            async with self._session_factory() as session:
                return await ChunkRepository(session).count_for_document(document_id)
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to count chunks: {e}", document_id=document_id
            ) from e

    async def list_chunks(self, document_id: str) -> List[ChunkRecord]:
        """Get a document's chunks ordered by position."""
        try:
            async with self._session_factory() as session:
                rows = await ChunkRepository(session).list_for_document(document_id)
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to list chunks: {e}", document_id=document_id
            ) from e
        return [_to_record(row) for row in rows]

    async def search(
        self,
        document_id: str,
        query_vector: Sequence[float],
        top_k: int = 5,
    ) -> List[ChunkSearchHit]:
        """Get the *top_k* chunks nearest to *query_vector* by cosine distance."""
        try:
            async with self._session_factory() as session:
                matches = await ChunkRepository(session).search_similar(
                    document_id, query_vector, top_k
                )
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Vector search failed: {e}", document_id=document_id
            ) from e

        hits = [
            ChunkSearchHit(
                content=row.content,
                position=row.position,
                token_count=row.token_count,
                similarity=1.0 - distance,
            )
            for row, distance in matches
        ]
        logger.info(
            f"Vector search completed: document_id={document_id}, results={len(hits)}"
        )
        return hits
