"""SQLAlchemy database models.

``documents`` and ``document_extractions`` belong to the upstream application
and are only read here. ``document_chunks`` is owned by this service. Column
names follow the existing camelCase schema.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pgvector.sqlalchemy import Vector
from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from extraction_indexer.config import get_settings


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class ProcessingStatus(str, Enum):
    """Upstream document processing status."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class Document(Base):
    """Uploaded document (upstream, read-only)."""

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    status: Mapped[ProcessingStatus] = mapped_column(
        SAEnum(ProcessingStatus, name="ProcessingStatus"),
        default=ProcessingStatus.PENDING,
        nullable=False,
    )
    uploaded_at: Mapped[datetime] = mapped_column(
        "uploadedAt", DateTime(timezone=True), default=_utcnow, nullable=False
    )

    extraction: Mapped[Optional["DocumentExtraction"]] = relationship(
        back_populates="document", uselist=False
    )
    chunks: Mapped[List["DocumentChunk"]] = relationship(
        back_populates="document", order_by="DocumentChunk.position"
    )


class DocumentExtraction(Base):
    """Structured extraction output for a document (upstream, read-only)."""

    __tablename__ = "document_extractions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    document_id: Mapped[str] = mapped_column(
        "documentId",
        String(36),
        ForeignKey("documents.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    extracted_data: Mapped[Any] = mapped_column(
        "extractedData", JSON().with_variant(JSONB(), "postgresql"), nullable=False
    )

    document: Mapped[Document] = relationship(back_populates="extraction")


class DocumentChunk(Base):
    """An embedded passage of a document's linearized extraction."""

    __tablename__ = "document_chunks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    document_id: Mapped[str] = mapped_column(
        "documentId",
        String(36),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    token_count: Mapped[int] = mapped_column("tokenCount", Integer, nullable=False)
    embedding: Mapped[Any] = mapped_column(
        Vector(get_settings().embedding.embedding_dimension), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), default=_utcnow, nullable=False
    )

    document: Mapped[Document] = relationship(back_populates="chunks")

    __table_args__ = (
        UniqueConstraint("documentId", "position", name="document_chunks_documentId_position_key"),
        Index("document_chunks_documentId_idx", "documentId"),
    )
