"""
Chat history adapter.

Reads recent question/answer turns as ConversationTurn records in
chronological order, and persists finished turns.

Dependencies: smartnotes.boundary.db.CRUD.chat_history_crud
System role: Chat history business logic adapter
"""

from typing import Any, List

from sqlalchemy.ext.asyncio import AsyncSession

from smartnotes.boundary.db.CRUD.chat_history_crud import chat_history_crud
from smartnotes.models.conversation import ConversationTurn


class ChatHistoryAdapter:
    """
    High-level adapter for chat history operations.

    Provides business logic layer on top of ChatHistoryCRUD.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize chat history adapter.

        Args:
            db: AsyncSession for database operations
        """
        self.db = db

    async def get_recent_turns(
        self,
        owner_id: str,
        limit: int = 5,
        conversation_id: str | None = None,
    ) -> List[ConversationTurn]:
        """
        Retrieve the newest turns for an owner, oldest first.

        Args:
            owner_id: Owner of the history
            limit: Maximum turns to return
            conversation_id: Optional conversation filter

        Returns:
            List of ConversationTurn in chronological order
        """
        if limit <= 0:
            return []

        rows = await chat_history_crud.get_recent(
            self.db,
            owner_id,
            limit,
            conversation_id=conversation_id,
        )
        return [
            ConversationTurn(
                question=row.question,
                answer=row.answer,
                created_at=row.created_at,
                conversation_id=row.conversation_id,
            )
            for row in reversed(rows)
        ]

    async def add_turn(
        self,
        owner_id: str,
        question: str,
        answer: str,
        conversation_id: str | None = None,
        sources: list[dict[str, Any]] | None = None,
        confidence: float | None = None,
    ) -> ConversationTurn:
        """
        Persist a finished question/answer turn.

        Args:
            owner_id: Owner of the history
            question: Asked question
            answer: Generated answer
            conversation_id: Optional conversation grouping
            sources: Cited sources ({"id", "title"} dicts)
            confidence: Answer confidence

        Returns:
            ConversationTurn: The stored turn
        """
        row = await chat_history_crud.create(
            self.db,
            owner_id=owner_id,
            conversation_id=conversation_id,
            question=question,
            answer=answer,
            sources=sources or [],
            confidence=confidence,
        )
        await self.db.commit()
        return ConversationTurn(
            question=row.question,
            answer=row.answer,
            created_at=row.created_at,
            conversation_id=row.conversation_id,
        )
