"""
CRUD operations package.

Exports module-level singletons for each model.

Dependencies: sqlalchemy, smartnotes.boundary.db.models
System role: Database access layer
"""

from smartnotes.boundary.db.CRUD.base_crud import BaseCRUD
from smartnotes.boundary.db.CRUD.chat_history_crud import ChatHistoryCRUD, chat_history_crud
from smartnotes.boundary.db.CRUD.document_chunk_crud import DocumentChunkCRUD, document_chunk_crud
from smartnotes.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud

__all__ = [
    "BaseCRUD",
    "ChatHistoryCRUD",
    "DocumentCRUD",
    "DocumentChunkCRUD",
    "chat_history_crud",
    "document_chunk_crud",
    "document_crud",
]
