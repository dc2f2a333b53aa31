"""One-shot backfill of chunks for completed documents."""

import asyncio
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from extraction_indexer.config import BackfillSettings
from extraction_indexer.database.models import ProcessingStatus
from extraction_indexer.database.repositories import DocumentRepository
from extraction_indexer.database.session import get_session
from extraction_indexer.models.document import SourceDocument
from extraction_indexer.models.result import BackfillResult, DocumentOutcome, OutcomeStatus
from extraction_indexer.services.chunk_store import ChunkStore
from extraction_indexer.services.indexing_service import DocumentIndexer
from extraction_indexer.utils.errors import OrchestrationError
from extraction_indexer.utils.logging import get_logger, log_error

logger = get_logger("backfill")


class BackfillOrchestrator:
    """
    Chunk and embed every eligible document that has no chunks yet.

    Documents are handled one at a time, in order. A document that already has
    chunks is skipped, which makes reruns safe and cheap. A failure inside one
    document is logged and counted and the run moves on; only failing to list
    the documents at all aborts the run (``OrchestrationError``).
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        indexer: DocumentIndexer,
        store: ChunkStore,
        settings: Optional[BackfillSettings] = None,
    ):
        self._session_factory = session_factory
        self.indexer = indexer
        self.store = store
        self.settings = settings or BackfillSettings()

    async def list_documents(self) -> List[SourceDocument]:
        """
        Enumerate eligible documents.

        Raises:
            OrchestrationError: If the document source cannot be read
        """
        try:
            status = ProcessingStatus(self.settings.eligible_status.upper())
        except ValueError as e:
            raise OrchestrationError(
                f"Unknown eligible status: {self.settings.eligible_status}",
                details={"valid": [s.value for s in ProcessingStatus]},
            ) from e

        try:
            async with get_session(self._session_factory) as session:
                return await DocumentRepository(session).list_eligible(
                    status=status, limit=self.settings.limit
                )
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            raise OrchestrationError(
                f"Failed to enumerate documents: {e}",
                details={"status": status.value},
            ) from e

    async def process_document(self, document: SourceDocument) -> DocumentOutcome:
        """Run the pipeline for one document, capturing any failure as an outcome."""
        document_id = document.id
        try:
            existing = await self.store.count(document_id)
            if existing > 0:
                logger.info(
                    f"Document already has chunks, skipping: document_id={document_id}, chunks={existing}"
                )
                return DocumentOutcome(document_id=document_id, status=OutcomeStatus.SKIPPED)

            records = await self.indexer.index_document(document_id, document.extracted_data)
            return DocumentOutcome(
                document_id=document_id,
                status=OutcomeStatus.PROCESSED,
                chunk_count=len(records),
            )
        except Exception as e:
            log_error(logger, "Failed to chunk document", e, document_id=document_id)
            return DocumentOutcome(
                document_id=document_id,
                status=OutcomeStatus.FAILED,
                error=str(e),
            )

    async def run(self) -> BackfillResult:
        """
        Process all eligible documents sequentially.

        Returns:
            Counts of processed, skipped and failed documents

        Raises:
            OrchestrationError: If the document source cannot be enumerated
        """
        result = BackfillResult(started_at=datetime.now(timezone.utc))

        documents = await self.list_documents()
        logger.info(f"Found {len(documents)} eligible documents")

        for document in documents:
            result.record(await self.process_document(document))

        result.completed_at = datetime.now(timezone.utc)
        logger.info(
            f"Chunking complete: processed={result.processed}, skipped={result.skipped}, "
            f"failed={result.failed}"
        )
        return result
