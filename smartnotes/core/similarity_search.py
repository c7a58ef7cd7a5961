"""
Similarity search engine.

Runs document-level and chunk-level nearest-neighbour queries against a
VectorStore and guarantees the result contract regardless of backend:
every hit has similarity > threshold, each list holds at most limit hits,
and hits are in non-increasing similarity order with ties kept in store
order.

Dependencies: smartnotes.boundary.vdb, smartnotes.models, smartnotes.core.exceptions
System role: Backend-agnostic ranking over the vector store
"""

import asyncio
import logging
import math
from collections.abc import Iterable

from smartnotes.boundary.vdb.base import VectorStore
from smartnotes.core.exceptions import InvalidParameterError
from smartnotes.models.search import SearchHit, SearchResults

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.5
DEFAULT_LIMIT = 5
MAX_LIMIT = 100


def rank_hits(hits: Iterable[SearchHit], threshold: float, limit: int) -> list[SearchHit]:
    """
    Filter, order and truncate hits.

    Args:
        hits: Candidate hits in store order
        threshold: Hits need similarity strictly above this
        limit: Maximum hits kept

    Returns:
        list[SearchHit]: At most limit hits, similarity non-increasing
    """
    kept = [hit for hit in hits if hit.similarity > threshold]
    # sorted() is stable, so equal scores keep their incoming order
    kept = sorted(kept, key=lambda hit: hit.similarity, reverse=True)
    return kept[:limit]


def merge_hits(
    documents: list[SearchHit],
    chunks: list[SearchHit],
    limit: int,
) -> list[SearchHit]:
    """
    Merge document-level and chunk-level hits into one ranking.

    A document may appear twice, once as itself and once through one of its
    chunks; no deduplication by parent document is attempted. Document hits
    precede chunk hits of equal similarity.

    Args:
        documents: Document-level hits
        chunks: Chunk-level hits
        limit: Global result limit

    Returns:
        list[SearchHit]: Combined hits sorted by similarity descending
    """
    combined = [*documents, *chunks]
    return sorted(combined, key=lambda hit: hit.similarity, reverse=True)[:limit]


def validate_search_params(
    threshold: float | None,
    limit: int | None,
    max_limit: int = MAX_LIMIT,
) -> tuple[float, int]:
    """
    Validate threshold and limit, substituting defaults for None.

    Args:
        threshold: Similarity threshold, must lie in [-1, 1)
        limit: Result limit, must lie in [1, max_limit]
        max_limit: Largest accepted limit

    Returns:
        tuple[float, int]: Effective (threshold, limit)

    Raises:
        InvalidParameterError: Value out of range or wrong type
    """
    if threshold is None:
        threshold = DEFAULT_THRESHOLD
    if limit is None:
        limit = DEFAULT_LIMIT

    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise InvalidParameterError("threshold must be a number", field="threshold")
    if not math.isfinite(threshold) or not -1.0 <= threshold < 1.0:
        raise InvalidParameterError(
            f"threshold must lie in [-1, 1), got {threshold}",
            field="threshold",
        )

    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidParameterError("limit must be an integer", field="limit")
    if not 1 <= limit <= max_limit:
        raise InvalidParameterError(
            f"limit must lie in [1, {max_limit}], got {limit}",
            field="limit",
        )

    return float(threshold), limit


class SimilaritySearchEngine:
    """Ranked vector search over documents and chunks of one owner."""

    def __init__(
        self,
        store: VectorStore,
        dimension: int | None = None,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        """
        Initialize search engine.

        Args:
            store: Vector store to query
            dimension: Expected query vector length; unchecked if None
            max_limit: Largest accepted limit
        """
        self.store = store
        self.dimension = dimension
        self.max_limit = max_limit

    def _check_query(self, query_vector: list[float], owner_id: str) -> None:
        if not owner_id:
            raise InvalidParameterError("owner_id is required for every search", field="owner_id")
        if not query_vector:
            raise InvalidParameterError("query_vector is empty", field="query_vector")
        if self.dimension is not None and len(query_vector) != self.dimension:
            raise InvalidParameterError(
                "query_vector has wrong dimension",
                field="query_vector",
                details={"expected": self.dimension, "actual": len(query_vector)},
            )

    async def search_documents(
        self,
        query_vector: list[float],
        owner_id: str,
        subject_id: str | None = None,
        threshold: float | None = DEFAULT_THRESHOLD,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[SearchHit]:
        """Ranked document-level hits."""
        threshold, limit = validate_search_params(threshold, limit, self.max_limit)
        self._check_query(query_vector, owner_id)
        hits = await self.store.query_documents_by_vector(
            owner_id, subject_id, query_vector, threshold, limit
        )
        return rank_hits(hits, threshold, limit)

    async def search_chunks(
        self,
        query_vector: list[float],
        owner_id: str,
        subject_id: str | None = None,
        threshold: float | None = DEFAULT_THRESHOLD,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[SearchHit]:
        """Ranked chunk-level hits."""
        threshold, limit = validate_search_params(threshold, limit, self.max_limit)
        self._check_query(query_vector, owner_id)
        hits = await self.store.query_chunks_by_vector(
            owner_id, subject_id, query_vector, threshold, limit
        )
        return rank_hits(hits, threshold, limit)

    async def search(
        self,
        query_vector: list[float],
        owner_id: str,
        subject_id: str | None = None,
        threshold: float | None = DEFAULT_THRESHOLD,
        limit: int | None = DEFAULT_LIMIT,
    ) -> SearchResults:
        """
        Search both granularities concurrently.

        Args:
            query_vector: Query embedding
            owner_id: Mandatory owner scope
            subject_id: Optional subject filter
            threshold: Minimum similarity (exclusive); None means default
            limit: Per-granularity maximum; None means default

        Returns:
            SearchResults: Document-level and chunk-level ranked lists

        Raises:
            InvalidParameterError: Parameters rejected before any store query
            VectorStoreError: Backend failure
        """
        threshold, limit = validate_search_params(threshold, limit, self.max_limit)
        self._check_query(query_vector, owner_id)

        documents, chunks = await asyncio.gather(
            self.store.query_documents_by_vector(
                owner_id, subject_id, query_vector, threshold, limit
            ),
            self.store.query_chunks_by_vector(
                owner_id, subject_id, query_vector, threshold, limit
            ),
        )

        results = SearchResults(
            documents=rank_hits(documents, threshold, limit),
            chunks=rank_hits(chunks, threshold, limit),
        )
        logger.debug(
            f"{__name__}:search - owner={owner_id} documents={len(results.documents)} "
            f"chunks={len(results.chunks)}"
        )
        return results
