"""
Domain records for document retrieval.

Exports:
  - Document, DocumentChunk, DocumentStatus: stored entities
  - ConversationTurn: read-only history input for context fusion
  - SearchHit, HitGranularity, SearchResults: per-query results
  - IngestionResult, BackfillResult: ingestion outcomes

Dependencies: pydantic
System role: Typed records passed between layers
"""

from smartnotes.models.conversation import ConversationTurn
from smartnotes.models.document import Document, DocumentChunk, DocumentStatus
from smartnotes.models.ingestion import BackfillResult, IngestionResult
from smartnotes.models.search import HitGranularity, SearchHit, SearchResults

__all__ = [
    "BackfillResult",
    "ConversationTurn",
    "Document",
    "DocumentChunk",
    "DocumentStatus",
    "HitGranularity",
    "IngestionResult",
    "SearchHit",
    "SearchResults",
]
