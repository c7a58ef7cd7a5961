"""
Search result models.

SearchHit records are produced fresh per query and never persisted.

Dependencies: pydantic
System role: Retrieval output contracts
"""

import enum
import uuid

from pydantic import BaseModel, Field


class HitGranularity(str, enum.Enum):
    """Whether a hit matched a whole document or one of its chunks."""

    DOCUMENT = "document"
    CHUNK = "chunk"


class SearchHit(BaseModel):
    """Single ranked match from the vector store."""

    source_id: uuid.UUID = Field(description="Document ID or chunk ID that matched")
    document_id: uuid.UUID = Field(description="Backing document ID")
    title: str = Field(default="", description="Backing document title")
    content: str = Field(description="Matched text")
    similarity: float = Field(ge=-1.0, le=1.0, allow_inf_nan=False, description="1 - cosine distance")
    granularity: HitGranularity
    chunk_index: int | None = Field(default=None, description="Set for chunk hits only")
    subject_id: str | None = None


class SearchResults(BaseModel):
    """Document-level and chunk-level hits for one query vector."""

    documents: list[SearchHit] = Field(default_factory=list)
    chunks: list[SearchHit] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.documents) + len(self.chunks)
