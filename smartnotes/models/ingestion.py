"""
Ingestion outcome models.

Dependencies: pydantic
System role: Return types for DocumentIngestionService
"""

import uuid

from pydantic import BaseModel, Field

from smartnotes.models.document import DocumentStatus


class IngestionResult(BaseModel):
    """Result of ingesting one document."""

    document_id: uuid.UUID = Field(description="Created document ID")
    status: DocumentStatus = Field(description="Final document status")
    chunk_count: int = Field(description="Number of chunks written")
    embedded_chunk_count: int = Field(description="Chunks stored with a vector")
    pending_chunk_indices: list[int] = Field(
        default_factory=list,
        description="Chunks left with a null vector, awaiting backfill",
    )
    processing_time_ms: float = Field(description="Total processing time in milliseconds")


class BackfillResult(BaseModel):
    """Result of one backfill pass over a document's unembedded chunks."""

    document_id: uuid.UUID
    embedded_chunk_indices: list[int] = Field(default_factory=list)
    failed_chunk_indices: list[int] = Field(default_factory=list)
    remaining: int = Field(default=0, description="Chunks still without a vector")
