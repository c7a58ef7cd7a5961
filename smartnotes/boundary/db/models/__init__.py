"""
Database models package.

Exports:
  - DocumentModel: Document ORM model with primary embedding
  - DocumentChunkModel: Chunk ORM model with per-chunk embedding
  - ChatHistoryModel: Question/answer turn ORM model

Dependencies: sqlalchemy, pgvector, smartnotes.boundary.db.base
System role: Database model definitions for domain entities
"""

from smartnotes.boundary.db.models.chat_history_model import ChatHistoryModel
from smartnotes.boundary.db.models.document_chunk_model import DocumentChunkModel
from smartnotes.boundary.db.models.document_model import DocumentModel

__all__ = [
    "ChatHistoryModel",
    "DocumentChunkModel",
    "DocumentModel",
]
