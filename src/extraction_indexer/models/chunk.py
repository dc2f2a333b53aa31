"""Chunk models for extraction indexing."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class TextChunk(BaseModel):
    """A chunk of text produced by the chunking service."""

    position: int = Field(..., ge=0, description="0-based position of this chunk within the document")
    text: str = Field(..., min_length=1, description="Trimmed chunk text content")
    token_count: int = Field(
        ..., ge=0, description="Approximate token count (ceil(chars / 4)); metadata only"
    )


class ChunkRecord(BaseModel):
    """A persisted chunk row together with its embedding."""

    id: str = Field(..., description="Chunk identifier")
    document_id: str = Field(..., description="Owning document identifier")
    content: str = Field(..., description="Chunk text content")
    position: int = Field(..., ge=0, description="Dense 0-based position within the document")
    token_count: int = Field(..., ge=0, description="Approximate token count")
    embedding: List[float] = Field(default_factory=list, description="Embedding vector")
    created_at: Optional[datetime] = Field(default=None, description="Row creation timestamp")


class ChunkSearchHit(BaseModel):
    """A chunk returned by similarity search."""

    content: str = Field(..., description="Chunk text content")
    position: int = Field(..., ge=0, description="Chunk position within the document")
    token_count: int = Field(..., ge=0, description="Approximate token count")
    similarity: float = Field(..., description="1 - cosine distance to the query vector")
