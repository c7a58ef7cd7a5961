"""
Document CRUD operations.

Owner-scoped reads, idempotent upserts and document-level nearest-neighbour
queries over the primary embedding.

Dependencies: sqlalchemy, pgvector, smartnotes.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, exists, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from smartnotes.boundary.db.base import utc_now
from smartnotes.boundary.db.models.document_model import DocumentModel
from smartnotes.boundary.db.CRUD.base_crud import BaseCRUD
from smartnotes.models.document import DocumentStatus

UPSERT_FIELDS = (
    "owner_id",
    "subject_id",
    "title",
    "description",
    "content_text",
    "embedding",
    "status",
    "chunk_count",
    "embedded_chunk_count",
)


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Every read takes owner_id so cross-owner access cannot be expressed.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def upsert(self, session: AsyncSession, id: UUID, **fields) -> DocumentModel:
        """
        Insert or replace a document row keyed by id.

        Args:
            session: Async database session
            id: Document UUID
            **fields: Column values from UPSERT_FIELDS

        Returns:
            DocumentModel: The stored row
        """
        values = {key: fields[key] for key in UPSERT_FIELDS if key in fields}
        if "created_at" in fields:
            values["created_at"] = fields["created_at"]

        update_values = {key: values[key] for key in values if key != "created_at"}
        update_values["updated_at"] = utc_now()

        stmt = (
            insert(DocumentModel)
            .values(id=id, **values)
            .on_conflict_do_update(index_elements=[DocumentModel.id], set_=update_values)
            .returning(DocumentModel)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def get_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        id: UUID,
    ) -> DocumentModel | None:
        """
        Retrieve a document only if it belongs to owner_id.

        Args:
            session: Async database session
            owner_id: Requesting owner
            id: Document UUID

        Returns:
            DocumentModel if found and owned, None otherwise
        """
        stmt = select(DocumentModel).where(
            DocumentModel.id == id,
            DocumentModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_for_owner(self, session: AsyncSession, owner_id: str, id: UUID) -> bool:
        """Delete an owned document; chunks follow via ON DELETE CASCADE."""
        stmt = delete(DocumentModel).where(
            DocumentModel.id == id,
            DocumentModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def has_searchable(
        self,
        session: AsyncSession,
        owner_id: str,
        subject_id: str | None = None,
    ) -> bool:
        """
        Check whether owner_id has any COMPLETED document with an embedding.

        Args:
            session: Async database session
            owner_id: Owner to check
            subject_id: Optional subject filter

        Returns:
            True if at least one searchable document exists
        """
        condition = (
            (DocumentModel.owner_id == owner_id)
            & (DocumentModel.status == DocumentStatus.COMPLETED)
            & DocumentModel.embedding.is_not(None)
        )
        if subject_id is not None:
            condition = condition & (DocumentModel.subject_id == subject_id)

        result = await session.execute(select(exists().where(condition)))
        return bool(result.scalar())

    async def query_by_vector(
        self,
        session: AsyncSession,
        owner_id: str,
        subject_id: str | None,
        query_vector: list[float],
        threshold: float,
        limit: int,
    ) -> Sequence[tuple[DocumentModel, float]]:
        """
        Nearest searchable documents by cosine distance.

        Args:
            session: Async database session
            owner_id: Mandatory owner filter
            subject_id: Optional subject filter
            query_vector: Query embedding
            threshold: Rows need 1 - distance > threshold
            limit: Maximum rows

        Returns:
            (DocumentModel, distance) pairs ordered by ascending distance
        """
        distance = DocumentModel.embedding.cosine_distance(query_vector)
        stmt = (
            select(DocumentModel, distance.label("distance"))
            .where(
                DocumentModel.owner_id == owner_id,
                DocumentModel.status == DocumentStatus.COMPLETED,
                DocumentModel.embedding.is_not(None),
                func.vector_norm(DocumentModel.embedding) > 0,
                (1 - distance) > threshold,
            )
        )
        if subject_id is not None:
            stmt = stmt.where(DocumentModel.subject_id == subject_id)
        stmt = stmt.order_by(distance.asc()).limit(limit)

        result = await session.execute(stmt)
        return [(row[0], float(row[1])) for row in result.all()]


document_crud = DocumentCRUD()
