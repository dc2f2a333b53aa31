"""Per-document pipeline: linearize, chunk, embed, persist."""

from typing import Any, List

from extraction_indexer.models.chunk import ChunkRecord, ChunkSearchHit, TextChunk
from extraction_indexer.services.chunk_store import ChunkStore
from extraction_indexer.services.chunking_service import ChunkingService
from extraction_indexer.services.embedding_service import EmbeddingProvider
from extraction_indexer.services.linearizer import linearize_text
from extraction_indexer.utils.errors import ProviderError
from extraction_indexer.utils.logging import get_logger

logger = get_logger("indexing_service")


class DocumentIndexer:
    """
    Turn one document's extraction payload into stored, embedded chunks.

    Collaborators are passed in once and reused for every document:
    - chunker: splits the linearized text
    - embedder: one batched provider call per document
    - store: replaces the document's chunk set in a single transaction
    """

    def __init__(
        self,
        chunker: ChunkingService,
        embedder: EmbeddingProvider,
        store: ChunkStore,
    ):
        self.chunker = chunker
        self.embedder = embedder
        self.store = store

    def build_chunks(self, extracted_data: Any) -> List[TextChunk]:
        """Linearize and chunk a payload. Never raises for any JSON-like value."""
        return self.chunker.chunk_text(linearize_text(extracted_data))

    async def index_document(self, document_id: str, extracted_data: Any) -> List[ChunkRecord]:
        """
        Rebuild the chunk set of one document.

        Args:
            document_id: Document identifier
            extracted_data: The document's extraction payload

        Returns:
            The persisted chunks, ordered by position

        Raises:
            ProviderError: If the embedding call fails
            PersistenceError: If the chunk set cannot be replaced
        """
        chunks = self.build_chunks(extracted_data)
        if not chunks:
            logger.warning(f"No text content to chunk: document_id={document_id}")
            return await self.store.replace(document_id, [], [])

        total_tokens = sum(chunk.token_count for chunk in chunks)
        logger.info(
            f"Created text chunks: document_id={document_id}, "
            f"chunks={len(chunks)}, estimated_tokens={total_tokens}"
        )

        vectors = await self.embedder.embed([chunk.text for chunk in chunks])
        if len(vectors) != len(chunks):
            raise ProviderError(
                "Embedding provider returned the wrong number of vectors",
                details={"document_id": document_id, "expected": len(chunks), "got": len(vectors)},
            )

        records = await self.store.replace(document_id, chunks, vectors)
        logger.info(
            f"Saved document chunks with embeddings: document_id={document_id}, chunks={len(records)}"
        )
        return records

    async def search_document(
        self,
        document_id: str,
        query: str,
        top_k: int = 5,
    ) -> List[ChunkSearchHit]:
        """Embed *query* and return the document's nearest chunks."""
        vectors = await self.embedder.embed([query])
        if len(vectors) != 1:
            raise ProviderError(
                "Embedding provider returned no vector for the query",
                details={"document_id": document_id},
            )
        return await self.store.search(document_id, vectors[0], top_k)
