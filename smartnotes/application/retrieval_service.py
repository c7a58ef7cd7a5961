"""
Retrieval service orchestrator.

Public entry point for semantic retrieval: fuses recent conversation into
the query text, embeds it, searches documents and chunks, and merges the
two rankings into one bounded list.

Dependencies: smartnotes.core, smartnotes.boundary.vdb
System role: Retrieval orchestration
"""

import logging
from collections.abc import Sequence

from smartnotes.application.chat_history_adapter import ChatHistoryAdapter
from smartnotes.boundary.vdb.base import VectorStore
from smartnotes.core.context_fusion import build_query_text
from smartnotes.core.embedder import Embedder
from smartnotes.core.exceptions import EmbeddingError, RetrievalError, VectorStoreError
from smartnotes.core.similarity_search import (
    DEFAULT_LIMIT,
    DEFAULT_THRESHOLD,
    SimilaritySearchEngine,
    merge_hits,
    validate_search_params,
)
from smartnotes.models.conversation import ConversationTurn
from smartnotes.models.search import SearchHit
from smartnotes.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class RetrievalService:
    """Retrieval service orchestrator."""

    def __init__(
        self,
        embedder: Embedder,
        search_engine: SimilaritySearchEngine,
        default_threshold: float = DEFAULT_THRESHOLD,
        default_limit: int = DEFAULT_LIMIT,
        history_turns: int = 5,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            embedder: Embedder for the fused query text
            search_engine: Similarity search over the vector store
            default_threshold: Threshold used when the caller passes None
            default_limit: Limit used when the caller passes None
            history_turns: Recent turns fused by retrieve_with_history()
        """
        self.embedder = embedder
        self.search_engine = search_engine
        self.default_threshold = default_threshold
        self.default_limit = default_limit
        self.history_turns = history_turns

    @property
    def store(self) -> VectorStore:
        return self.search_engine.store

    async def retrieve(
        self,
        question: str,
        owner_id: str,
        subject_id: str | None = None,
        recent_turns: Sequence[ConversationTurn] = (),
        threshold: float | None = None,
        limit: int | None = None,
    ) -> list[SearchHit]:
        """
        Retrieve ranked hits for a question.

        Flow:
        1. Validate threshold / limit
        2. Return [] when the owner has no searchable documents
        3. Build fused query text from question and recent turns
        4. Embed it (failure is fatal)
        5. Search documents and chunks concurrently
        6. Merge and truncate to limit

        Args:
            question: Current question
            owner_id: Owner whose documents are searched
            subject_id: Optional subject filter
            recent_turns: Chronological history, oldest first
            threshold: Minimum similarity (exclusive)
            limit: Maximum hits returned

        Returns:
            list[SearchHit]: Hits sorted by similarity descending, possibly empty

        Raises:
            InvalidParameterError: threshold or limit out of range
            RetrievalError: Query embedding or vector store failure
        """
        threshold, limit = validate_search_params(
            self.default_threshold if threshold is None else threshold,
            self.default_limit if limit is None else limit,
            self.search_engine.max_limit,
        )

        try:
            if not await self.store.has_searchable_documents(owner_id):
                log_with_context(
                    logger,
                    logging.INFO,
                    "No searchable documents for owner",
                    owner_id=owner_id,
                )
                return []
        except VectorStoreError as e:
            raise RetrievalError(
                "Vector store unavailable",
                owner_id=owner_id,
                details={"error_type": type(e).__name__},
            ) from e

        query_text = build_query_text(question, recent_turns)

        try:
            query_vector = await self.embedder.embed(query_text)
        except EmbeddingError as e:
            log_exception_with_context(
                logger,
                "Query embedding failed",
                e,
                owner_id=owner_id,
                history_turns=len(recent_turns),
            )
            raise RetrievalError(
                f"Could not embed query: {e.message}",
                owner_id=owner_id,
                details={"error_type": type(e).__name__},
            ) from e

        try:
            results = await self.search_engine.search(
                query_vector,
                owner_id,
                subject_id=subject_id,
                threshold=threshold,
                limit=limit,
            )
        except VectorStoreError as e:
            raise RetrievalError(
                "Vector search failed",
                owner_id=owner_id,
                details={"error_type": type(e).__name__},
            ) from e

        hits = merge_hits(results.documents, results.chunks, limit)
        log_with_context(
            logger,
            logging.INFO,
            "Retrieval completed",
            owner_id=owner_id,
            subject_id=subject_id,
            document_hits=len(results.documents),
            chunk_hits=len(results.chunks),
            returned=len(hits),
        )
        return hits

    async def retrieve_with_history(
        self,
        question: str,
        owner_id: str,
        history: ChatHistoryAdapter,
        subject_id: str | None = None,
        conversation_id: str | None = None,
        threshold: float | None = None,
        limit: int | None = None,
    ) -> list[SearchHit]:
        """
        Retrieve using the owner's most recent turns as context.

        Args:
            question: Current question
            owner_id: Owner whose documents and history are read
            history: Chat history adapter bound to a session
            subject_id: Optional subject filter
            conversation_id: Restrict history to one conversation

        Returns:
            list[SearchHit]: Same contract as retrieve()
        """
        turns = await history.get_recent_turns(
            owner_id,
            limit=self.history_turns,
            conversation_id=conversation_id,
        )
        return await self.retrieve(
            question,
            owner_id,
            subject_id=subject_id,
            recent_turns=turns,
            threshold=threshold,
            limit=limit,
        )
