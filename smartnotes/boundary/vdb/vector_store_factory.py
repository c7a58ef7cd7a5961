"""
Vector store factory for selecting between in-memory (dev) and pgvector (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable. One store is built
per (store type, dimension) and shared by every caller, so ingestion and
retrieval see the same rows in local dev mode as well.

Dependencies: smartnotes.boundary.vdb, smartnotes.boundary.db, smartnotes.configs
System role: Vector store instantiation and selection
"""

import logging
from functools import lru_cache

from smartnotes.boundary.vdb.base import VectorStore
from smartnotes.boundary.vdb.memory_store import InMemoryVectorStore
from smartnotes.configs import Settings, get_settings

logger = logging.getLogger(__name__)


def get_vector_store(settings: Settings | None = None) -> VectorStore:
    """
    Factory function to get vector store based on environment configuration.

    Returns:
        VectorStore: Process-wide store for the configured type

    Raises:
        ValueError: If store_type is invalid
    """
    settings = settings or get_settings()
    return build_vector_store(
        settings.vector_store.store_type.lower(),
        settings.embedding.dimension,
    )


@lru_cache
def build_vector_store(store_type: str, dimension: int) -> VectorStore:
    """
    Build the store once per (store_type, dimension).

    Args:
        store_type: "memory" or "pgvector"
        dimension: Length of every stored vector
    """
    if store_type == "memory":
        logger.info(f"{__name__}:build_vector_store - Creating in-memory vector store (local dev mode)")
        return InMemoryVectorStore(dimension=dimension)

    elif store_type == "pgvector":
        from smartnotes.boundary.db.connection import get_async_session_factory
        from smartnotes.boundary.vdb.pgvector_store import PgVectorStore

        logger.info(f"{__name__}:build_vector_store - Creating pgvector store (production mode)")
        return PgVectorStore(get_async_session_factory())

    else:
        raise ValueError(
            f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
            f"Must be 'memory' (dev) or 'pgvector' (production)."
        )
