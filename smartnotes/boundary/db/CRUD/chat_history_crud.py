"""
Chat history CRUD operations.

Persists finished question/answer turns and reads the most recent ones
for an owner.

Dependencies: sqlalchemy, smartnotes.boundary.db.models
System role: Chat history persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartnotes.boundary.db.models.chat_history_model import ChatHistoryModel
from smartnotes.boundary.db.CRUD.base_crud import BaseCRUD


class ChatHistoryCRUD(BaseCRUD[ChatHistoryModel]):
    """CRUD operations for ChatHistoryModel."""

    def __init__(self) -> None:
        """Initialize ChatHistoryCRUD with ChatHistoryModel."""
        super().__init__(ChatHistoryModel)

    async def get_recent(
        self,
        session: AsyncSession,
        owner_id: str,
        limit: int,
        conversation_id: str | None = None,
    ) -> Sequence[ChatHistoryModel]:
        """
        Retrieve the newest turns for an owner, newest first.

        Args:
            session: Async database session
            owner_id: Owner of the history
            limit: Maximum turns to return
            conversation_id: Optional conversation filter

        Returns:
            Sequence of ChatHistoryModels ordered by created_at descending
        """
        stmt = select(ChatHistoryModel).where(ChatHistoryModel.owner_id == owner_id)
        if conversation_id is not None:
            stmt = stmt.where(ChatHistoryModel.conversation_id == conversation_id)
        stmt = stmt.order_by(ChatHistoryModel.created_at.desc()).limit(limit)

        result = await session.execute(stmt)
        return result.scalars().all()


chat_history_crud = ChatHistoryCRUD()
