"""
Test suite for PgVectorStore.

Tests record mapping from ORM rows, session commit/rollback handling and
error wrapping. CRUD singletons and the session factory are mocked.

System role: Verification of production vector store adapter
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from smartnotes.boundary.vdb.pgvector_store import PgVectorStore
from smartnotes.core.exceptions import VectorStoreError
from smartnotes.models.document import Document, DocumentStatus
from smartnotes.models.search import HitGranularity

MODULE = "smartnotes.boundary.vdb.pgvector_store"


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def session_factory(mock_session: AsyncSession) -> MagicMock:
    """Provide session factory yielding mock_session as async context manager."""
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = mock_session
    factory.return_value.__aexit__.return_value = False
    return factory


@pytest.fixture
def store(session_factory: MagicMock) -> PgVectorStore:
    """Provide PgVectorStore over mocked sessions."""
    return PgVectorStore(session_factory)


def _document_row(owner_id: str = "user-alice", embedding=None) -> MagicMock:
    row = MagicMock()
    row.id = uuid.uuid4()
    row.owner_id = owner_id
    row.subject_id = "bio"
    row.title = "Cells"
    row.description = None
    row.content_text = "Cells divide."
    row.embedding = embedding
    row.status = DocumentStatus.COMPLETED
    row.chunk_count = 2
    row.embedded_chunk_count = 1
    row.created_at = datetime.now(timezone.utc)
    return row


class TestPgVectorStoreSessions:
    """Test suite for session handling."""

    @pytest.mark.asyncio
    async def test_success_should_commit(
        self,
        store: PgVectorStore,
        mock_session: AsyncSession,
    ) -> None:
        """Test a successful operation commits its session."""
        with patch(f"{MODULE}.document_crud") as mock_crud:
            mock_crud.has_searchable = AsyncMock(return_value=True)

            result = await store.has_searchable_documents("user-alice")

        assert result is True
        mock_session.commit.assert_awaited_once()
        mock_session.rollback.assert_not_called()

    @pytest.mark.asyncio
    async def test_database_error_should_rollback_and_wrap(
        self,
        store: PgVectorStore,
        mock_session: AsyncSession,
    ) -> None:
        """Test SQLAlchemy failures become VectorStoreError."""
        # Arrange
        with patch(f"{MODULE}.document_crud") as mock_crud:
            mock_crud.query_by_vector = AsyncMock(
                side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
            )

            # Act
            with pytest.raises(VectorStoreError) as exc_info:
                await store.query_documents_by_vector("user-alice", None, [1.0, 0.0], 0.5, 5)

        # Assert
        assert exc_info.value.details["operation"] == "query_documents"
        assert isinstance(exc_info.value.__cause__, SQLAlchemyError)
        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_called()


class TestPgVectorStoreMapping:
    """Test suite for ORM row to record mapping."""

    @pytest.mark.asyncio
    async def test_upsert_document_should_pass_fields_and_map_row(
        self,
        store: PgVectorStore,
        mock_session: AsyncSession,
    ) -> None:
        """Test document fields are forwarded and the stored row returned."""
        # Arrange
        document = Document(owner_id="user-alice", title="Cells", content="Cells divide.")
        row = _document_row(embedding=[0.5, 0.5])
        with patch(f"{MODULE}.document_crud") as mock_crud:
            mock_crud.upsert = AsyncMock(return_value=row)

            # Act
            stored = await store.upsert_document(document)

        # Assert
        kwargs = mock_crud.upsert.await_args.kwargs
        assert kwargs["id"] == document.id
        assert kwargs["content_text"] == "Cells divide."
        assert stored.id == row.id
        assert stored.embedding == [0.5, 0.5]

    @pytest.mark.asyncio
    async def test_document_query_should_convert_distance_to_similarity(
        self,
        store: PgVectorStore,
    ) -> None:
        """Test similarity is 1 - cosine distance."""
        # Arrange
        row = _document_row()
        with patch(f"{MODULE}.document_crud") as mock_crud:
            mock_crud.query_by_vector = AsyncMock(return_value=[(row, 0.09)])

            # Act
            hits = await store.query_documents_by_vector("user-alice", None, [1.0, 0.0], 0.5, 5)

        # Assert
        assert len(hits) == 1
        assert hits[0].similarity == pytest.approx(0.91)
        assert hits[0].source_id == row.id
        assert hits[0].granularity == HitGranularity.DOCUMENT

    @pytest.mark.asyncio
    async def test_chunk_query_should_reference_parent(
        self,
        store: PgVectorStore,
    ) -> None:
        """Test chunk hits carry parent id and title."""
        # Arrange
        parent = _document_row()
        chunk = MagicMock()
        chunk.id = uuid.uuid4()
        chunk.chunk_index = 1
        chunk.content_text = "Mitosis has four phases."
        with patch(f"{MODULE}.document_chunk_crud") as mock_crud:
            mock_crud.query_by_vector = AsyncMock(return_value=[(chunk, parent, 0.05)])

            # Act
            hits = await store.query_chunks_by_vector("user-alice", "bio", [1.0, 0.0], 0.5, 5)

        # Assert
        assert hits[0].source_id == chunk.id
        assert hits[0].document_id == parent.id
        assert hits[0].title == "Cells"
        assert hits[0].chunk_index == 1
        assert hits[0].similarity == pytest.approx(0.95)

    @pytest.mark.asyncio
    async def test_get_document_should_return_none_when_missing(
        self,
        store: PgVectorStore,
    ) -> None:
        """Test missing or foreign documents map to None."""
        with patch(f"{MODULE}.document_crud") as mock_crud:
            mock_crud.get_for_owner = AsyncMock(return_value=None)

            assert await store.get_document("user-alice", uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_zero_query_vector_should_match_nothing(
        self,
        store: PgVectorStore,
        session_factory: MagicMock,
    ) -> None:
        """Test a zero-norm query skips the database, as the in-memory store matches nothing."""
        with patch(f"{MODULE}.document_crud") as doc_crud, patch(f"{MODULE}.document_chunk_crud") as chunk_crud:
            assert await store.query_documents_by_vector("user-alice", None, [0.0, 0.0], -1.0, 5) == []
            assert await store.query_chunks_by_vector("user-alice", None, [0.0, 0.0], -1.0, 5) == []

        doc_crud.query_by_vector.assert_not_called()
        chunk_crud.query_by_vector.assert_not_called()
        session_factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_float_drift_should_stay_within_similarity_bounds(
        self,
        store: PgVectorStore,
    ) -> None:
        """Test a slightly negative distance still yields similarity 1.0."""
        row = _document_row()
        with patch(f"{MODULE}.document_crud") as mock_crud:
            mock_crud.query_by_vector = AsyncMock(return_value=[(row, -1e-12)])

            hits = await store.query_documents_by_vector("user-alice", None, [1.0, 0.0], 0.5, 5)

        assert hits[0].similarity == 1.0

    @pytest.mark.asyncio
    async def test_count_embedded_chunks_should_delegate_with_owner(
        self,
        store: PgVectorStore,
        mock_session: AsyncSession,
    ) -> None:
        document_id = uuid.uuid4()
        with patch(f"{MODULE}.document_chunk_crud") as mock_crud:
            mock_crud.count_embedded = AsyncMock(return_value=3)

            count = await store.count_embedded_chunks("user-alice", document_id)

        assert count == 3
        mock_crud.count_embedded.assert_awaited_once_with(mock_session, "user-alice", document_id)
