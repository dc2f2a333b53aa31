"""Pydantic models for backfill results."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class OutcomeStatus(str, Enum):
    """Per-document backfill outcome."""

    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"


class DocumentOutcome(BaseModel):
    """Result of running the pipeline for one document."""

    document_id: str = Field(..., description="Document identifier")
    status: OutcomeStatus = Field(..., description="What happened to the document")
    chunk_count: int = Field(default=0, description="Chunks written (processed only)")
    error: Optional[str] = Field(default=None, description="Error message if failed")


class BackfillResult(BaseModel):
    """Summary of one backfill run."""

    processed: int = Field(default=0, description="Documents whose chunks were written")
    skipped: int = Field(default=0, description="Documents that already had chunks")
    failed: int = Field(default=0, description="Documents whose pipeline raised")
    failures: List[DocumentOutcome] = Field(default_factory=list, description="Failed documents")
    started_at: Optional[datetime] = Field(default=None, description="When the run started")
    completed_at: Optional[datetime] = Field(default=None, description="When the run completed")

    @property
    def total(self) -> int:
        """Number of eligible documents seen."""
        return self.processed + self.skipped + self.failed

    @property
    def has_failures(self) -> bool:
        """Whether any document failed."""
        return self.failed > 0

    def record(self, outcome: DocumentOutcome) -> None:
        """Count *outcome* towards the summary."""
        if outcome.status == OutcomeStatus.PROCESSED:
            self.processed += 1
        elif outcome.status == OutcomeStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
            self.failures.append(outcome)
