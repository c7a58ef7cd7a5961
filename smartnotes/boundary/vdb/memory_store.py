"""
In-memory vector store.

Process-local VectorStore backed by dictionaries and a linear cosine scan.
Intended for local development and tests; holds no state across processes.

Dependencies: smartnotes.boundary.vdb.metrics, smartnotes.models
System role: Development vector store (local testing only)
"""

import uuid

from smartnotes.boundary.vdb.base import VectorStore
from smartnotes.boundary.vdb.metrics import cosine_distance, to_similarity
from smartnotes.core.exceptions import InvalidParameterError
from smartnotes.models.document import Document, DocumentChunk, DocumentStatus
from smartnotes.models.search import HitGranularity, SearchHit


class InMemoryVectorStore(VectorStore):
    """Dictionary-backed VectorStore with exact cosine search."""

    def __init__(self, dimension: int | None = None) -> None:
        """
        Initialize store.

        Args:
            dimension: Required length of every stored vector; unchecked if None
        """
        self.dimension = dimension
        self._documents: dict[uuid.UUID, Document] = {}
        # (document_id, chunk_index) -> chunk
        self._chunks: dict[tuple[uuid.UUID, int], DocumentChunk] = {}

    def _check_dimension(self, vector: list[float] | None, field: str) -> None:
        if vector is None or self.dimension is None or len(vector) == self.dimension:
            return
        raise InvalidParameterError(
            f"{field} has wrong dimension",
            field=field,
            details={"expected": self.dimension, "actual": len(vector)},
        )

    async def upsert_document(self, document: Document) -> Document:
        self._check_dimension(document.embedding, "embedding")
        stored = document.model_copy(deep=True)
        self._documents[stored.id] = stored
        return stored.model_copy(deep=True)

    async def upsert_chunk(self, chunk: DocumentChunk) -> DocumentChunk:
        self._check_dimension(chunk.embedding, "embedding")
        key = (chunk.document_id, chunk.chunk_index)
        existing = self._chunks.get(key)
        stored = chunk.model_copy(deep=True)
        if existing is not None:
            stored.id = existing.id
        self._chunks[key] = stored
        return stored.model_copy(deep=True)

    async def get_document(self, owner_id: str, document_id: uuid.UUID) -> Document | None:
        document = self._documents.get(document_id)
        if document is None or document.owner_id != owner_id:
            return None
        return document.model_copy(deep=True)

    async def delete_document(self, owner_id: str, document_id: uuid.UUID) -> bool:
        document = self._documents.get(document_id)
        if document is None or document.owner_id != owner_id:
            return False
        del self._documents[document_id]
        for key in [k for k in self._chunks if k[0] == document_id]:
            del self._chunks[key]
        return True

    async def has_searchable_documents(
        self,
        owner_id: str,
        subject_id: str | None = None,
    ) -> bool:
        return any(self._visible_documents(owner_id, subject_id))

    async def list_unembedded_chunks(
        self,
        owner_id: str,
        document_id: uuid.UUID,
        limit: int | None = None,
    ) -> list[DocumentChunk]:
        document = self._documents.get(document_id)
        if document is None or document.owner_id != owner_id:
            return []

        pending = sorted(
            (c for (doc_id, _), c in self._chunks.items()
             if doc_id == document_id and c.embedding is None),
            key=lambda c: c.chunk_index,
        )
        if limit is not None:
            pending = pending[:limit]
        return [c.model_copy(deep=True) for c in pending]

    async def count_embedded_chunks(self, owner_id: str, document_id: uuid.UUID) -> int:
        document = self._documents.get(document_id)
        if document is None or document.owner_id != owner_id:
            return 0
        return sum(
            1 for (doc_id, _), c in self._chunks.items()
            if doc_id == document_id and c.embedding is not None
        )

    async def query_documents_by_vector(
        self,
        owner_id: str,
        subject_id: str | None,
        query_vector: list[float],
        threshold: float,
        limit: int,
    ) -> list[SearchHit]:
        scored = []
        for document in self._visible_documents(owner_id, subject_id):
            distance = cosine_distance(document.embedding, query_vector)
            if distance is None:
                continue
            scored.append((distance, document))

        hits = []
        for distance, document in sorted(scored, key=lambda pair: pair[0]):
            similarity = to_similarity(distance)
            if similarity <= threshold:
                continue
            hits.append(
                SearchHit(
                    source_id=document.id,
                    document_id=document.id,
                    title=document.title,
                    content=document.content,
                    similarity=similarity,
                    granularity=HitGranularity.DOCUMENT,
                    subject_id=document.subject_id,
                )
            )
        return hits[:limit]

    async def query_chunks_by_vector(
        self,
        owner_id: str,
        subject_id: str | None,
        query_vector: list[float],
        threshold: float,
        limit: int,
    ) -> list[SearchHit]:
        visible = {
            d.id: d
            for d in self._visible_documents(owner_id, subject_id, require_embedding=False)
        }

        scored = []
        for (document_id, _), chunk in self._chunks.items():
            if document_id not in visible or chunk.embedding is None:
                continue
            distance = cosine_distance(chunk.embedding, query_vector)
            if distance is None:
                continue
            scored.append((distance, chunk))

        hits = []
        for distance, chunk in sorted(scored, key=lambda pair: pair[0]):
            similarity = to_similarity(distance)
            if similarity <= threshold:
                continue
            parent = visible[chunk.document_id]
            hits.append(
                SearchHit(
                    source_id=chunk.id,
                    document_id=parent.id,
                    title=parent.title,
                    content=chunk.content,
                    similarity=similarity,
                    granularity=HitGranularity.CHUNK,
                    chunk_index=chunk.chunk_index,
                    subject_id=parent.subject_id,
                )
            )
        return hits[:limit]

    def _visible_documents(
        self,
        owner_id: str,
        subject_id: str | None,
        require_embedding: bool = True,
    ):
        for document in self._documents.values():
            if document.owner_id != owner_id:
                continue
            if subject_id is not None and document.subject_id != subject_id:
                continue
            if document.status != DocumentStatus.COMPLETED:
                continue
            if require_embedding and document.embedding is None:
                continue
            yield document
