"""
Document and chunk domain models.

Represents stored documents and their overlapping chunks, each with an
optional embedding vector.

Dependencies: pydantic
System role: Document data structures shared by ingestion and retrieval
"""

import enum
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class DocumentStatus(str, enum.Enum):
    """
    Document processing lifecycle states.

    PENDING: Document created, awaiting ingestion
    PROCESSING: Chunking and embedding in progress
    COMPLETED: Primary embedding stored, visible to retrieval
    FAILED: No primary embedding could be produced
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Document(BaseModel):
    """Uploaded document with extracted text and optional primary embedding."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, description="Document identifier")
    owner_id: str = Field(description="Owning user ID")
    subject_id: str | None = Field(default=None, description="Optional subject ID")
    title: str = Field(default="", description="Display title")
    description: str | None = Field(default=None, description="Optional description")
    content: str = Field(default="", description="Full extracted text")
    embedding: list[float] | None = Field(default=None, description="Primary embedding vector")
    status: DocumentStatus = Field(default=DocumentStatus.PENDING)
    chunk_count: int = Field(default=0, description="Number of chunks written")
    embedded_chunk_count: int = Field(default=0, description="Chunks holding a vector")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_searchable(self) -> bool:
        """True when the document is visible to document-level retrieval."""
        return self.status == DocumentStatus.COMPLETED and self.embedding is not None

    @property
    def is_fully_embedded(self) -> bool:
        """True when every chunk of the document carries an embedding."""
        return self.embedded_chunk_count >= self.chunk_count


class DocumentChunk(BaseModel):
    """Overlapping window of a document's text with an optional embedding."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, description="Chunk identifier")
    document_id: uuid.UUID = Field(description="Parent document ID")
    chunk_index: int = Field(ge=0, description="0-based position within the document")
    content: str = Field(description="Chunk text")
    embedding: list[float] | None = Field(default=None, description="Chunk embedding vector")
