"""Document models for the upstream extraction output."""

from typing import Any

from pydantic import BaseModel, Field


class SourceDocument(BaseModel):
    """
    Read-only view of an upstream document and its extraction payload.

    The payload is whatever the document-understanding step produced; it has
    no fixed schema and is only ever linearized, never interpreted.
    """

    id: str = Field(..., description="Document identifier")
    status: str = Field(..., description="Upstream processing status")
    extracted_data: Any = Field(default=None, description="Structured extraction payload")
