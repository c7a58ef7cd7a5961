"""
Test suite for SimilaritySearchEngine and ranking helpers.

Tests threshold filtering, ordering, truncation, merge behaviour and
parameter validation. Store access is mocked or served by the in-memory
vector store.

System role: Verification of ranked vector search
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from smartnotes.boundary.vdb.base import VectorStore
from smartnotes.core.exceptions import InvalidParameterError
from smartnotes.core.similarity_search import (
    SimilaritySearchEngine,
    merge_hits,
    rank_hits,
    validate_search_params,
)
from smartnotes.models.document import Document, DocumentChunk, DocumentStatus
from smartnotes.models.search import HitGranularity, SearchHit


def _hit(similarity: float, granularity: HitGranularity = HitGranularity.DOCUMENT) -> SearchHit:
    doc_id = uuid.uuid4()
    return SearchHit(
        source_id=doc_id if granularity == HitGranularity.DOCUMENT else uuid.uuid4(),
        document_id=doc_id,
        title="t",
        content=f"content {similarity}",
        similarity=similarity,
        granularity=granularity,
        chunk_index=None if granularity == HitGranularity.DOCUMENT else 0,
    )


@pytest.fixture
def mock_store() -> VectorStore:
    """Provide mock vector store returning no hits."""
    store = AsyncMock(spec=VectorStore)
    store.query_documents_by_vector = AsyncMock(return_value=[])
    store.query_chunks_by_vector = AsyncMock(return_value=[])
    return store


class TestRankHits:
    """Test suite for rank_hits() function."""

    def test_should_drop_hits_at_or_below_threshold(self) -> None:
        """Test threshold is exclusive."""
        # Arrange
        hits = [_hit(0.5), _hit(0.50001), _hit(0.2)]

        # Act
        ranked = rank_hits(hits, threshold=0.5, limit=10)

        # Assert
        assert [h.similarity for h in ranked] == [0.50001]

    def test_should_sort_descending_and_truncate(self) -> None:
        """Test ordering and limit."""
        ranked = rank_hits([_hit(0.6), _hit(0.9), _hit(0.7)], threshold=0.0, limit=2)

        assert [h.similarity for h in ranked] == [0.9, 0.7]

    def test_ties_should_keep_incoming_order(self) -> None:
        """Test equal scores are not reordered."""
        # Arrange
        first, second = _hit(0.8), _hit(0.8)

        # Act
        ranked = rank_hits([first, second], threshold=0.0, limit=5)

        # Assert
        assert ranked == [first, second]


class TestMergeHits:
    """Test suite for merge_hits() function."""

    def test_should_interleave_by_similarity(self) -> None:
        """Test document and chunk hits are ranked together."""
        # Arrange
        documents = [_hit(0.91)]
        chunks = [_hit(0.95, HitGranularity.CHUNK), _hit(0.6, HitGranularity.CHUNK)]

        # Act
        merged = merge_hits(documents, chunks, limit=5)

        # Assert
        assert [h.similarity for h in merged] == [0.95, 0.91, 0.6]
        assert merged[0].granularity == HitGranularity.CHUNK

    def test_should_truncate_to_global_limit(self) -> None:
        """Test merged list never exceeds limit."""
        merged = merge_hits([_hit(0.9), _hit(0.8)], [_hit(0.85, HitGranularity.CHUNK)], limit=2)

        assert [h.similarity for h in merged] == [0.9, 0.85]

    def test_equal_scores_should_place_documents_first(self) -> None:
        """Test document hit precedes chunk hit on a tie."""
        # Arrange
        document = _hit(0.7)
        chunk = _hit(0.7, HitGranularity.CHUNK)

        # Act
        merged = merge_hits([document], [chunk], limit=5)

        # Assert
        assert merged == [document, chunk]

    def test_should_keep_document_and_its_chunk(self) -> None:
        """Test no deduplication by parent document."""
        # Arrange
        document = _hit(0.9)
        chunk = document.model_copy(
            update={"source_id": uuid.uuid4(), "granularity": HitGranularity.CHUNK, "chunk_index": 0}
        )

        # Act
        merged = merge_hits([document], [chunk], limit=5)

        # Assert
        assert len(merged) == 2
        assert merged[0].document_id == merged[1].document_id


class TestValidateSearchParams:
    """Test suite for validate_search_params() function."""

    def test_none_should_use_defaults(self) -> None:
        """Test defaults are 0.5 and 5."""
        assert validate_search_params(None, None) == (0.5, 5)

    @pytest.mark.parametrize("threshold", [1.0, 1.5, -1.01, float("nan"), float("inf"), True, "0.5"])
    def test_invalid_threshold_should_raise(self, threshold) -> None:
        """Test thresholds outside [-1, 1) or of the wrong type are rejected."""
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_search_params(threshold, 5)

        assert exc_info.value.details["field"] == "threshold"

    @pytest.mark.parametrize("limit", [0, -1, 101, 2.5, False])
    def test_invalid_limit_should_raise(self, limit) -> None:
        """Test limits outside [1, max_limit] or of the wrong type are rejected."""
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_search_params(0.5, limit)

        assert exc_info.value.details["field"] == "limit"

    def test_boundary_values_should_be_accepted(self) -> None:
        """Test -1 threshold and max limit are valid."""
        assert validate_search_params(-1, 100) == (-1.0, 100)


class TestSimilaritySearchEngine:
    """Test suite for SimilaritySearchEngine class."""

    @pytest.mark.asyncio
    async def test_search_should_query_both_granularities(
        self,
        mock_store: VectorStore,
        query_vector: list[float],
        owner_id: str,
    ) -> None:
        """Test search forwards owner, subject, threshold and limit to the store."""
        # Arrange
        engine = SimilaritySearchEngine(mock_store, dimension=len(query_vector))

        # Act
        results = await engine.search(query_vector, owner_id, subject_id="bio", threshold=0.3, limit=7)

        # Assert
        assert results.total == 0
        mock_store.query_documents_by_vector.assert_awaited_once_with(
            owner_id, "bio", query_vector, 0.3, 7
        )
        mock_store.query_chunks_by_vector.assert_awaited_once_with(
            owner_id, "bio", query_vector, 0.3, 7
        )

    @pytest.mark.asyncio
    async def test_search_should_enforce_contract_on_store_output(
        self,
        mock_store: VectorStore,
        query_vector: list[float],
        owner_id: str,
    ) -> None:
        """Test below-threshold and unordered store output is corrected."""
        # Arrange
        mock_store.query_documents_by_vector.return_value = [_hit(0.6), _hit(0.4), _hit(0.9)]
        engine = SimilaritySearchEngine(mock_store)

        # Act
        results = await engine.search(query_vector, owner_id, threshold=0.5, limit=5)

        # Assert
        assert [h.similarity for h in results.documents] == [0.9, 0.6]

    @pytest.mark.asyncio
    async def test_invalid_params_should_raise_before_store_query(
        self,
        mock_store: VectorStore,
        query_vector: list[float],
        owner_id: str,
    ) -> None:
        """Test validation happens before any store access."""
        engine = SimilaritySearchEngine(mock_store)

        with pytest.raises(InvalidParameterError):
            await engine.search(query_vector, owner_id, threshold=2.0)

        mock_store.query_documents_by_vector.assert_not_called()
        mock_store.query_chunks_by_vector.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_owner_should_raise(
        self,
        mock_store: VectorStore,
        query_vector: list[float],
    ) -> None:
        """Test searches are always owner scoped."""
        engine = SimilaritySearchEngine(mock_store)

        with pytest.raises(InvalidParameterError) as exc_info:
            await engine.search_documents(query_vector, "")

        assert exc_info.value.details["field"] == "owner_id"

    @pytest.mark.asyncio
    async def test_wrong_dimension_should_raise(
        self,
        mock_store: VectorStore,
        owner_id: str,
    ) -> None:
        """Test query vector length is checked against the configured dimension."""
        engine = SimilaritySearchEngine(mock_store, dimension=8)

        with pytest.raises(InvalidParameterError):
            await engine.search_chunks([1.0, 0.0], owner_id)

    @pytest.mark.asyncio
    async def test_search_over_memory_store_should_rank_both_lists(
        self,
        memory_store,
        similar_vector,
        query_vector: list[float],
        owner_id: str,
    ) -> None:
        """Test end-to-end search over stored documents and chunks."""
        # Arrange
        document = await memory_store.upsert_document(
            Document(
                owner_id=owner_id,
                title="Cells",
                content="full text",
                embedding=similar_vector(0.91),
                status=DocumentStatus.COMPLETED,
            )
        )
        await memory_store.upsert_chunk(
            DocumentChunk(document_id=document.id, chunk_index=0, content="c0", embedding=similar_vector(0.95))
        )
        await memory_store.upsert_chunk(
            DocumentChunk(document_id=document.id, chunk_index=1, content="c1", embedding=similar_vector(0.3))
        )
        engine = SimilaritySearchEngine(memory_store, dimension=len(query_vector))

        # Act
        results = await engine.search(query_vector, owner_id)

        # Assert
        assert [h.similarity for h in results.documents] == pytest.approx([0.91])
        assert [h.chunk_index for h in results.chunks] == [0]
        assert results.chunks[0].title == "Cells"
        assert results.chunks[0].similarity == pytest.approx(0.95)
