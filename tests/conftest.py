"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory vector store, controllable embedding clients, embedder
and owner fixtures, vector helpers
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import math
from unittest.mock import AsyncMock

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding, Embeddings
from sqlalchemy.ext.asyncio import AsyncSession

from smartnotes.boundary.vdb.memory_store import InMemoryVectorStore
from smartnotes.boundary.vdb.vector_store_factory import build_vector_store
from smartnotes.core.embedder import Embedder

TEST_DIMENSION = 8


def unit_vector_with_similarity(similarity: float, dimension: int = TEST_DIMENSION) -> list[float]:
    """
    Build a vector whose cosine similarity to axis_vector() equals similarity.

    Args:
        similarity: Target cosine similarity in [-1, 1]
        dimension: Vector length (>= 2)
    """
    vector = [0.0] * dimension
    vector[0] = similarity
    vector[1] = math.sqrt(max(0.0, 1.0 - similarity * similarity))
    return vector


def axis_vector(dimension: int = TEST_DIMENSION) -> list[float]:
    """Unit vector along the first axis, used as the query vector."""
    vector = [0.0] * dimension
    vector[0] = 1.0
    return vector


class MappingEmbeddings(Embeddings):
    """Embeddings returning a fixed vector per text, with a fallback."""

    def __init__(self, mapping: dict[str, list[float]], default: list[float]) -> None:
        self.mapping = mapping
        self.default = default
        self.calls: list[str] = []

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        return list(self.mapping.get(text, self.default))


@pytest.fixture(autouse=True)
def clear_vector_store_cache():
    """Drop process-wide stores between tests."""
    build_vector_store.cache_clear()
    yield
    build_vector_store.cache_clear()


@pytest.fixture
def owner_id() -> str:
    """Provide sample owner ID."""
    return "user-alice"


@pytest.fixture
def other_owner_id() -> str:
    """Provide a second owner ID for isolation checks."""
    return "user-bob"


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    """Provide empty in-memory vector store."""
    return InMemoryVectorStore(dimension=TEST_DIMENSION)


@pytest.fixture
def fake_embeddings() -> DeterministicFakeEmbedding:
    """Provide deterministic fake embedding client."""
    return DeterministicFakeEmbedding(size=TEST_DIMENSION)


@pytest.fixture
def embedder(fake_embeddings: DeterministicFakeEmbedding) -> Embedder:
    """Provide Embedder over the deterministic fake client with no retry wait."""
    return Embedder(
        client=fake_embeddings,
        dimension=TEST_DIMENSION,
        max_retries=3,
        retry_initial_wait=0,
    )


@pytest.fixture
def unavailable_embedder() -> Embedder:
    """Provide Embedder without a configured provider."""
    return Embedder(client=None, dimension=TEST_DIMENSION)


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def similar_vector():
    """Provide factory for vectors at a given similarity to query_vector."""
    return unit_vector_with_similarity


@pytest.fixture
def query_vector() -> list[float]:
    """Provide unit query vector."""
    return axis_vector()


@pytest.fixture
def query_client(query_vector: list[float]) -> MappingEmbeddings:
    """Provide embedding client mapping every text to the query vector."""
    return MappingEmbeddings(mapping={}, default=query_vector)
