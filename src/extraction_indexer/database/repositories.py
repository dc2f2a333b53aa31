"""Database repositories for documents and their chunks."""

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import JSON, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from extraction_indexer.database.models import (
    Document,
    DocumentChunk,
    DocumentExtraction,
    ProcessingStatus,
)
from extraction_indexer.models.chunk import TextChunk
from extraction_indexer.models.document import SourceDocument


class DocumentRepository:
    """Read access to upstream documents and their extraction payloads."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_eligible(
        self,
        status: ProcessingStatus = ProcessingStatus.COMPLETED,
        limit: Optional[int] = None,
    ) -> List[SourceDocument]:
        """
        Get documents in *status* that have an extraction payload.

        Args:
            status: Required processing status
            limit: Optional cap on the number of documents returned

        Returns:
            Documents ordered by upload time, then id
        """
        query = (
            select(Document.id, Document.status, DocumentExtraction.extracted_data)
            .join(DocumentExtraction, DocumentExtraction.document_id == Document.id)
            .where(Document.status == status)
            .where(DocumentExtraction.extracted_data.is_not(None))
            .where(DocumentExtraction.extracted_data != JSON.NULL)
            .order_by(Document.uploaded_at, Document.id)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return [
            SourceDocument(id=row.id, status=row.status.value, extracted_data=row.extracted_data)
            for row in result.all()
        ]


class ChunkRepository:
    """Repository for ``document_chunks`` rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def count_for_document(self, document_id: str) -> int:
        """Count persisted chunks for a document."""
        result = await self.session.execute(
            select(func.count())
            .select_from(DocumentChunk)
            .where(DocumentChunk.document_id == document_id)
        )
        return int(result.scalar_one())

    async def delete_for_document(self, document_id: str) -> int:
        """Delete every chunk of a document; returns the number of rows removed."""
        result = await self.session.execute(
            delete(DocumentChunk).where(DocumentChunk.document_id == document_id)
        )
        return result.rowcount or 0

    async def add_all(
        self,
        document_id: str,
        chunks: Sequence[TextChunk],
        vectors: Sequence[Sequence[float]],
    ) -> List[DocumentChunk]:
        """Insert chunks with positions 0..N-1 in the given order."""
        rows = [
            DocumentChunk(
                document_id=document_id,
                content=chunk.text,
                position=position,
                token_count=chunk.token_count,
                embedding=list(vector),
            )
            for position, (chunk, vector) in enumerate(zip(chunks, vectors))
        ]
        self.session.add_all(rows)
        await self.session.flush()
        return rows

    async def list_for_document(self, document_id: str) -> List[DocumentChunk]:
        """Get a document's chunks ordered by position."""
        result = await self.session.execute(
            select(DocumentChunk)
            .where(DocumentChunk.document_id == document_id)
            .order_by(DocumentChunk.position)
        )
        return list(result.scalars().all())

    async def search_similar(
        self,
        document_id: str,
        query_vector: Sequence[float],
        top_k: int = 5,
    ) -> List[Tuple[DocumentChunk, float]]:
        """
        Get the *top_k* chunks of a document closest to *query_vector*.

        Returns:
            ``(chunk, cosine_distance)`` pairs, nearest first
        """
        distance = DocumentChunk.embedding.cosine_distance(list(query_vector)).label("distance")
        result = await self.session.execute(
            select(DocumentChunk, distance)
            .where(DocumentChunk.document_id == document_id)
            .order_by(distance)
            .limit(top_k)
        )
        return [(row[0], float(row[1])) for row in result.all()]
