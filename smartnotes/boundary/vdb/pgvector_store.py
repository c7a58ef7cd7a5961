"""
PostgreSQL + pgvector store for production retrieval.

Implements VectorStore over the documents / document_chunks tables. Each
operation runs in its own session and commits on success; SQLAlchemy
failures are logged and wrapped in VectorStoreError.

Dependencies: sqlalchemy, pgvector, asyncpg, smartnotes.boundary.db
System role: Production vector store (PostgreSQL)
"""

import logging
import uuid
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from smartnotes.boundary.db.CRUD.document_chunk_crud import document_chunk_crud
from smartnotes.boundary.db.CRUD.document_crud import document_crud
from smartnotes.boundary.db.models.document_chunk_model import DocumentChunkModel
from smartnotes.boundary.db.models.document_model import DocumentModel
from smartnotes.boundary.vdb.base import VectorStore
from smartnotes.boundary.vdb.metrics import to_similarity, vector_norm
from smartnotes.core.exceptions import VectorStoreError
from smartnotes.models.document import Document, DocumentChunk
from smartnotes.models.search import HitGranularity, SearchHit

logger = logging.getLogger(__name__)


def _to_vector(value) -> list[float] | None:
    # pgvector returns numpy arrays
    if value is None:
        return None
    return [float(v) for v in value]


def document_from_model(row: DocumentModel) -> Document:
    return Document(
        id=row.id,
        owner_id=row.owner_id,
        subject_id=row.subject_id,
        title=row.title,
        description=row.description,
        content=row.content_text,
        embedding=_to_vector(row.embedding),
        status=row.status,
        chunk_count=row.chunk_count,
        embedded_chunk_count=row.embedded_chunk_count,
        created_at=row.created_at,
    )


def chunk_from_model(row: DocumentChunkModel) -> DocumentChunk:
    return DocumentChunk(
        id=row.id,
        document_id=row.document_id,
        chunk_index=row.chunk_index,
        content=row.content_text,
        embedding=_to_vector(row.embedding),
    )


class PgVectorStore(VectorStore):
    """VectorStore backed by PostgreSQL with the pgvector extension."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize store.

        Args:
            session_factory: Async session factory bound to a pgvector database
        """
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str):
        session: AsyncSession
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.exception(
                    f"{__name__}:{operation} - Database operation failed",
                    extra={"operation": operation, "error": str(e)},
                )
                raise VectorStoreError(
                    message=f"Vector store {operation} failed",
                    operation=operation,
                    details={"error": str(e)},
                ) from e

    async def upsert_document(self, document: Document) -> Document:
        async with self._session("upsert_document") as session:
            row = await document_crud.upsert(
                session,
                id=document.id,
                owner_id=document.owner_id,
                subject_id=document.subject_id,
                title=document.title,
                description=document.description,
                content_text=document.content,
                embedding=document.embedding,
                status=document.status,
                chunk_count=document.chunk_count,
                embedded_chunk_count=document.embedded_chunk_count,
                created_at=document.created_at,
            )
            return document_from_model(row)

    async def upsert_chunk(self, chunk: DocumentChunk) -> DocumentChunk:
        async with self._session("upsert_chunk") as session:
            row = await document_chunk_crud.upsert(
                session,
                id=chunk.id,
                document_id=chunk.document_id,
                chunk_index=chunk.chunk_index,
                content_text=chunk.content,
                embedding=chunk.embedding,
            )
            return chunk_from_model(row)

    async def get_document(self, owner_id: str, document_id: uuid.UUID) -> Document | None:
        async with self._session("get_document") as session:
            row = await document_crud.get_for_owner(session, owner_id, document_id)
            return document_from_model(row) if row is not None else None

    async def delete_document(self, owner_id: str, document_id: uuid.UUID) -> bool:
        async with self._session("delete_document") as session:
            return await document_crud.delete_for_owner(session, owner_id, document_id)

    async def has_searchable_documents(
        self,
        owner_id: str,
        subject_id: str | None = None,
    ) -> bool:
        async with self._session("has_searchable_documents") as session:
            return await document_crud.has_searchable(session, owner_id, subject_id)

    async def list_unembedded_chunks(
        self,
        owner_id: str,
        document_id: uuid.UUID,
        limit: int | None = None,
    ) -> list[DocumentChunk]:
        async with self._session("list_unembedded_chunks") as session:
            rows = await document_chunk_crud.list_unembedded(
                session, owner_id, document_id, limit
            )
            return [chunk_from_model(row) for row in rows]

    async def count_embedded_chunks(self, owner_id: str, document_id: uuid.UUID) -> int:
        async with self._session("count_embedded_chunks") as session:
            return await document_chunk_crud.count_embedded(session, owner_id, document_id)

    async def query_documents_by_vector(
        self,
        owner_id: str,
        subject_id: str | None,
        query_vector: list[float],
        threshold: float,
        limit: int,
    ) -> list[SearchHit]:
        # pgvector gives NaN distance for a zero-norm query
        if vector_norm(query_vector) == 0.0:
            return []
        async with self._session("query_documents") as session:
            rows = await document_crud.query_by_vector(
                session, owner_id, subject_id, query_vector, threshold, limit
            )
            return [
                SearchHit(
                    source_id=row.id,
                    document_id=row.id,
                    title=row.title,
                    content=row.content_text,
                    similarity=to_similarity(distance),
                    granularity=HitGranularity.DOCUMENT,
                    subject_id=row.subject_id,
                )
                for row, distance in rows
            ]

    async def query_chunks_by_vector(
        self,
        owner_id: str,
        subject_id: str | None,
        query_vector: list[float],
        threshold: float,
        limit: int,
    ) -> list[SearchHit]:
        if vector_norm(query_vector) == 0.0:
            return []
        async with self._session("query_chunks") as session:
            rows = await document_chunk_crud.query_by_vector(
                session, owner_id, subject_id, query_vector, threshold, limit
            )
            return [
                SearchHit(
                    source_id=chunk.id,
                    document_id=parent.id,
                    title=parent.title,
                    content=chunk.content_text,
                    similarity=to_similarity(distance),
                    granularity=HitGranularity.CHUNK,
                    chunk_index=chunk.chunk_index,
                    subject_id=parent.subject_id,
                )
                for chunk, parent, distance in rows
            ]
