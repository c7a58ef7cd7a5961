"""
Application services.

Exports:
  - RetrievalService: context-aware retrieval entry point
  - DocumentIngestionService: chunk, embed and store uploaded text
  - ChatHistoryAdapter: recent question/answer turns for context fusion

Dependencies: smartnotes.core, smartnotes.boundary
System role: Orchestration layer consumed by external endpoints
"""

from smartnotes.application.chat_history_adapter import ChatHistoryAdapter
from smartnotes.application.ingestion_service import DocumentIngestionService
from smartnotes.application.retrieval_service import RetrievalService

__all__ = [
    "ChatHistoryAdapter",
    "DocumentIngestionService",
    "RetrievalService",
]
