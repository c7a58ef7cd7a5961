"""
Document ORM model.

Represents uploaded documents with extracted text, processing status and a
nullable primary embedding.

Dependencies: sqlalchemy, pgvector, smartnotes.boundary.db.base
System role: Document persistence for ingestion and document-level search
"""

from pgvector.sqlalchemy import Vector
from sqlalchemy import Enum, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartnotes.boundary.db.base import Base, TimestampMixin, UUIDMixin
from smartnotes.configs import get_settings
from smartnotes.models.document import DocumentStatus

EMBEDDING_DIMENSION = get_settings().embedding.dimension


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion state.

    Lifecycle: PENDING -> PROCESSING -> COMPLETED or FAILED. Only COMPLETED
    rows with a non-null embedding are visible to document-level search.

    Attributes:
        id: UUID primary key (auto-generated)
        owner_id: Owning user (every vector query filters on it)
        subject_id: Optional subject
        title: Display title
        description: Optional description
        content_text: Full extracted text
        embedding: Primary embedding (nullable)
        status: Processing state
        chunk_count: Chunks written for this document
        embedded_chunk_count: Chunks currently holding a vector
    """

    __tablename__ = "documents"

    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    subject_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    embedding: Mapped[list[float] | None] = mapped_column(
        Vector(EMBEDDING_DIMENSION),
        nullable=True,
    )

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False),
        nullable=False,
        default=DocumentStatus.PENDING,
    )

    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    embedded_chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    chunks = relationship(
        "DocumentChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_documents_owner_status", "owner_id", "status"),
    )
