"""
Vector database boundary layer.

Provides the VectorStore interface and its backends.
- InMemoryVectorStore: process-local store for development and tests
- PgVectorStore: PostgreSQL + pgvector store (lazy import, needs asyncpg)

Dependencies: smartnotes.models, sqlalchemy, pgvector
System role: Vector store adapter for ingestion and retrieval
"""

from smartnotes.boundary.vdb.base import VectorStore
from smartnotes.boundary.vdb.memory_store import InMemoryVectorStore
from smartnotes.boundary.vdb.metrics import cosine_distance, to_similarity, vector_norm


def get_pgvector_store():
    """Lazy import for PgVectorStore to avoid loading the ORM for in-memory use."""
    from smartnotes.boundary.vdb.pgvector_store import PgVectorStore
    return PgVectorStore


__all__ = [
    "InMemoryVectorStore",
    "VectorStore",
    "cosine_distance",
    "get_pgvector_store",
    "to_similarity",
    "vector_norm",
]
