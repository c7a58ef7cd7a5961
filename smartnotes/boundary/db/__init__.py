"""
Relational database boundary layer.

Exports the declarative base, async session factories and ORM models.

Dependencies: sqlalchemy, pgvector, asyncpg
System role: Relational persistence for documents, chunks and chat history
"""

from smartnotes.boundary.db.base import Base, TimestampMixin, UUIDMixin
from smartnotes.boundary.db.connection import (
    get_async_engine,
    get_async_session_factory,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_engine",
    "get_async_session_factory",
]
