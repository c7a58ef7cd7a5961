"""
Vector store interface.

Every query method takes owner_id as a required argument; there is no way to
read another owner's rows through this interface. subject_id is an optional
extra equality filter. Query methods return only rows whose similarity
(1 - cosine distance) is strictly greater than threshold, ordered by
ascending distance, at most limit rows. Only COMPLETED documents with a
non-null primary embedding, and non-null chunk embeddings of such
documents, are visible to queries. Zero-norm vectors never match.

Dependencies: smartnotes.models
System role: Storage boundary between ingestion and retrieval
"""

import uuid
from abc import ABC, abstractmethod

from smartnotes.models.document import Document, DocumentChunk
from smartnotes.models.search import SearchHit


class VectorStore(ABC):
    """Persistence and nearest-neighbour queries for documents and chunks."""

    @abstractmethod
    async def upsert_document(self, document: Document) -> Document:
        """Insert or replace a document keyed by its id."""

    @abstractmethod
    async def upsert_chunk(self, chunk: DocumentChunk) -> DocumentChunk:
        """Insert or replace a chunk keyed by (document_id, chunk_index)."""

    @abstractmethod
    async def get_document(self, owner_id: str, document_id: uuid.UUID) -> Document | None:
        """Fetch a document if it exists and belongs to owner_id."""

    @abstractmethod
    async def delete_document(self, owner_id: str, document_id: uuid.UUID) -> bool:
        """Delete a document and its chunks. Returns False if not found."""

    @abstractmethod
    async def has_searchable_documents(
        self,
        owner_id: str,
        subject_id: str | None = None,
    ) -> bool:
        """True when owner_id has at least one COMPLETED document with an embedding."""

    @abstractmethod
    async def list_unembedded_chunks(
        self,
        owner_id: str,
        document_id: uuid.UUID,
        limit: int | None = None,
    ) -> list[DocumentChunk]:
        """Chunks of an owned document that still have a null embedding, by index."""

    @abstractmethod
    async def count_embedded_chunks(self, owner_id: str, document_id: uuid.UUID) -> int:
        """Number of chunks of an owned document that hold a vector."""

    @abstractmethod
    async def query_documents_by_vector(
        self,
        owner_id: str,
        subject_id: str | None,
        query_vector: list[float],
        threshold: float,
        limit: int,
    ) -> list[SearchHit]:
        """Nearest documents by primary embedding."""

    @abstractmethod
    async def query_chunks_by_vector(
        self,
        owner_id: str,
        subject_id: str | None,
        query_vector: list[float],
        threshold: float,
        limit: int,
    ) -> list[SearchHit]:
        """Nearest chunks by chunk embedding."""
