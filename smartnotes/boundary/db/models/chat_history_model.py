"""
Chat history ORM model.

One row per finished question/answer turn.

Dependencies: sqlalchemy, smartnotes.boundary.db.base
System role: Conversation history persistence (source of query context)
"""

from sqlalchemy import Float, Index, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from smartnotes.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ChatHistoryModel(Base, UUIDMixin, TimestampMixin):
    """Question/answer turn owned by a user, optionally grouped by conversation."""

    __tablename__ = "chat_history"

    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    conversation_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    sources: Mapped[list | None] = mapped_column(JSON, nullable=True)
    confidence: Mapped[float | None] = mapped_column(Float, nullable=True)

    __table_args__ = (
        Index("idx_chat_history_owner_created", "owner_id", "created_at"),
    )
