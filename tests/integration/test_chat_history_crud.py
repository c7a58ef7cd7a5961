"""
Test suite for ChatHistoryCRUD and ChatHistoryAdapter.

Tests newest-first retrieval, conversation filtering, chronological
reordering in the adapter and turn persistence. Uses a mocked AsyncSession.

System role: Verification of chat history persistence layer
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from smartnotes.application.chat_history_adapter import ChatHistoryAdapter
from smartnotes.boundary.db.CRUD.chat_history_crud import ChatHistoryCRUD


@pytest.fixture
def chat_history_crud() -> ChatHistoryCRUD:
    """Provide ChatHistoryCRUD instance for testing."""
    return ChatHistoryCRUD()


def _row(question: str, answer: str, minutes_ago: int) -> MagicMock:
    row = MagicMock()
    row.question = question
    row.answer = answer
    row.conversation_id = None
    row.created_at = datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)
    return row


class TestChatHistoryCRUDGetRecent:
    """Test suite for ChatHistoryCRUD.get_recent() method."""

    @pytest.mark.asyncio
    async def test_should_order_newest_first_and_limit(
        self,
        chat_history_crud: ChatHistoryCRUD,
        mock_db_session: AsyncSession,
    ) -> None:
        """Test query filters owner, orders descending and limits."""
        # Arrange
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute = AsyncMock(return_value=result)

        # Act
        rows = await chat_history_crud.get_recent(mock_db_session, "user-alice", 5)

        # Assert
        assert rows == []
        stmt = mock_db_session.execute.await_args.args[0]
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "chat_history.owner_id = " in sql
        assert "ORDER BY chat_history.created_at DESC" in sql
        assert "LIMIT" in sql
        assert "conversation_id = " not in sql

    @pytest.mark.asyncio
    async def test_should_filter_conversation_when_given(
        self,
        chat_history_crud: ChatHistoryCRUD,
        mock_db_session: AsyncSession,
    ) -> None:
        """Test conversation_id narrows the query."""
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute = AsyncMock(return_value=result)

        await chat_history_crud.get_recent(mock_db_session, "user-alice", 5, conversation_id="c1")

        stmt = mock_db_session.execute.await_args.args[0]
        assert "chat_history.conversation_id = " in str(stmt.compile(dialect=postgresql.dialect()))


class TestChatHistoryAdapter:
    """Test suite for ChatHistoryAdapter."""

    @pytest.mark.asyncio
    async def test_get_recent_turns_should_return_oldest_first(
        self,
        mock_db_session: AsyncSession,
    ) -> None:
        """Test newest-first rows are reversed into chronological turns."""
        # Arrange
        rows = [_row("q3", "a3", 1), _row("q2", "a2", 5), _row("q1", "a1", 10)]
        adapter = ChatHistoryAdapter(mock_db_session)
        with patch(
            "smartnotes.application.chat_history_adapter.chat_history_crud"
        ) as mock_crud:
            mock_crud.get_recent = AsyncMock(return_value=rows)

            # Act
            turns = await adapter.get_recent_turns("user-alice", limit=3)

        # Assert
        assert [t.question for t in turns] == ["q1", "q2", "q3"]
        mock_crud.get_recent.assert_awaited_once_with(
            mock_db_session, "user-alice", 3, conversation_id=None
        )

    @pytest.mark.asyncio
    async def test_zero_limit_should_skip_query(
        self,
        mock_db_session: AsyncSession,
    ) -> None:
        """Test non-positive limit returns no turns without a query."""
        adapter = ChatHistoryAdapter(mock_db_session)

        assert await adapter.get_recent_turns("user-alice", limit=0) == []
        mock_db_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_turn_should_create_and_commit(
        self,
        mock_db_session: AsyncSession,
    ) -> None:
        """Test turn persistence through the CRUD layer."""
        # Arrange
        adapter = ChatHistoryAdapter(mock_db_session)
        with patch(
            "smartnotes.application.chat_history_adapter.chat_history_crud"
        ) as mock_crud:
            mock_crud.create = AsyncMock(return_value=_row("What is mitosis?", "Cell division.", 0))

            # Act
            turn = await adapter.add_turn(
                "user-alice",
                "What is mitosis?",
                "Cell division.",
                sources=[{"id": "d1", "title": "Biology"}],
                confidence=0.9,
            )

        # Assert
        assert turn.question == "What is mitosis?"
        kwargs = mock_crud.create.await_args.kwargs
        assert kwargs["owner_id"] == "user-alice"
        assert kwargs["sources"] == [{"id": "d1", "title": "Biology"}]
        mock_db_session.commit.assert_awaited_once()
