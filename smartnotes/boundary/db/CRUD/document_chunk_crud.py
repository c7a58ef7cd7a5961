"""
Document chunk CRUD operations.

Upserts keyed by (document_id, chunk_index), backfill listing and
chunk-level nearest-neighbour queries joined to the owning document.

Dependencies: sqlalchemy, pgvector, smartnotes.boundary.db.models
System role: Chunk persistence operations
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from smartnotes.boundary.db.base import utc_now
from smartnotes.boundary.db.models.document_chunk_model import DocumentChunkModel
from smartnotes.boundary.db.models.document_model import DocumentModel
from smartnotes.boundary.db.CRUD.base_crud import BaseCRUD
from smartnotes.models.document import DocumentStatus


class DocumentChunkCRUD(BaseCRUD[DocumentChunkModel]):
    """CRUD operations for DocumentChunkModel."""

    def __init__(self) -> None:
        """Initialize DocumentChunkCRUD with DocumentChunkModel."""
        super().__init__(DocumentChunkModel)

    async def upsert(
        self,
        session: AsyncSession,
        id: UUID,
        document_id: UUID,
        chunk_index: int,
        content_text: str,
        embedding: list[float] | None,
    ) -> DocumentChunkModel:
        """
        Insert or replace the chunk at (document_id, chunk_index).

        Args:
            session: Async database session
            id: Chunk UUID used on first insert
            document_id: Parent document UUID
            chunk_index: Position within the document
            content_text: Chunk text
            embedding: Chunk vector or None

        Returns:
            DocumentChunkModel: The stored row
        """
        stmt = (
            insert(DocumentChunkModel)
            .values(
                id=id,
                document_id=document_id,
                chunk_index=chunk_index,
                content_text=content_text,
                embedding=embedding,
            )
            .on_conflict_do_update(
                index_elements=[DocumentChunkModel.document_id, DocumentChunkModel.chunk_index],
                set_={
                    "content_text": content_text,
                    "embedding": embedding,
                    "updated_at": utc_now(),
                },
            )
            .returning(DocumentChunkModel)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def count_embedded(self, session: AsyncSession, owner_id: str, document_id: UUID) -> int:
        """Number of chunks of an owned document that hold a vector."""
        stmt = (
            select(func.count())
            .select_from(DocumentChunkModel)
            .join(DocumentModel, DocumentChunkModel.document_id == DocumentModel.id)
            .where(
                DocumentModel.owner_id == owner_id,
                DocumentChunkModel.document_id == document_id,
                DocumentChunkModel.embedding.is_not(None),
            )
        )
        result = await session.execute(stmt)
        return int(result.scalar() or 0)

    async def list_unembedded(
        self,
        session: AsyncSession,
        owner_id: str,
        document_id: UUID,
        limit: int | None = None,
    ) -> Sequence[DocumentChunkModel]:
        """
        Chunks of an owned document still lacking a vector, by chunk index.

        Args:
            session: Async database session
            owner_id: Owner of the parent document
            document_id: Parent document UUID
            limit: Maximum chunks to return

        Returns:
            Sequence of DocumentChunkModels
        """
        stmt = (
            select(DocumentChunkModel)
            .join(DocumentModel, DocumentChunkModel.document_id == DocumentModel.id)
            .where(
                DocumentModel.owner_id == owner_id,
                DocumentChunkModel.document_id == document_id,
                DocumentChunkModel.embedding.is_(None),
            )
            .order_by(DocumentChunkModel.chunk_index.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def query_by_vector(
        self,
        session: AsyncSession,
        owner_id: str,
        subject_id: str | None,
        query_vector: list[float],
        threshold: float,
        limit: int,
    ) -> Sequence[tuple[DocumentChunkModel, Any, float]]:
        """
        Nearest embedded chunks of the owner's COMPLETED documents.

        Returns:
            (DocumentChunkModel, DocumentModel, distance) triples ordered by
            ascending distance
        """
        distance = DocumentChunkModel.embedding.cosine_distance(query_vector)
        stmt = (
            select(DocumentChunkModel, DocumentModel, distance.label("distance"))
            .join(DocumentModel, DocumentChunkModel.document_id == DocumentModel.id)
            .where(
                DocumentModel.owner_id == owner_id,
                DocumentModel.status == DocumentStatus.COMPLETED,
                DocumentChunkModel.embedding.is_not(None),
                # zero-norm rows yield NaN distance
                func.vector_norm(DocumentChunkModel.embedding) > 0,
                (1 - distance) > threshold,
            )
        )
        if subject_id is not None:
            stmt = stmt.where(DocumentModel.subject_id == subject_id)
        stmt = stmt.order_by(distance.asc()).limit(limit)

        result = await session.execute(stmt)
        return [(row[0], row[1], float(row[2])) for row in result.all()]


document_chunk_crud = DocumentChunkCRUD()
