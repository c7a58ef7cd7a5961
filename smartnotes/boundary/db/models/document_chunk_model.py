"""
Document chunk ORM model.

Dependencies: sqlalchemy, pgvector, smartnotes.boundary.db.base
System role: Chunk persistence for chunk-level search
"""

import uuid

from pgvector.sqlalchemy import Vector
from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartnotes.boundary.db.base import Base, TimestampMixin, UUIDMixin
from smartnotes.boundary.db.models.document_model import EMBEDDING_DIMENSION


class DocumentChunkModel(Base, UUIDMixin, TimestampMixin):
    """
    Overlapping text window of a document.

    Chunks beyond the synchronously embedded prefix are stored with a null
    embedding and stay invisible to search until backfilled.

    Constraints:
        (document_id, chunk_index) is unique; upserts key on it
        document_id: Foreign key ON DELETE CASCADE to documents.id
    """

    __tablename__ = "document_chunks"

    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    content_text: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float] | None] = mapped_column(
        Vector(EMBEDDING_DIMENSION),
        nullable=True,
    )

    document = relationship("DocumentModel", back_populates="chunks")

    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_document_chunks_position"),
    )
