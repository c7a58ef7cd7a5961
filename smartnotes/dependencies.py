"""
Dependency injection container.

Factory functions wiring settings, embedding provider, vector store and
application services together.

Dependencies: smartnotes.configs, smartnotes.application, smartnotes.boundary
System role: DI container for service injection
"""

from smartnotes.application.ingestion_service import DocumentIngestionService
from smartnotes.application.retrieval_service import RetrievalService
from smartnotes.boundary.embeddings.provider import build_embedding_client
from smartnotes.boundary.vdb.base import VectorStore
from smartnotes.boundary.vdb.vector_store_factory import get_vector_store
from smartnotes.configs import Settings, get_settings
from smartnotes.core.chunker import TextChunker
from smartnotes.core.embedder import Embedder
from smartnotes.core.similarity_search import SimilaritySearchEngine
from smartnotes.observability.logger import configure_logging


def get_embedder(settings: Settings | None = None) -> Embedder:
    """
    Get embedder bound to the configured provider.

    An unconfigured provider yields an Embedder whose embed() raises
    EmbeddingProviderUnavailable.

    Args:
        settings: Application settings (defaults to get_settings())

    Returns:
        Embedder: Embedder instance
    """
    settings = settings or get_settings()
    config = settings.embedding
    return Embedder(
        client=build_embedding_client(config),
        dimension=config.dimension,
        max_input_chars=config.max_input_chars,
        timeout_seconds=config.timeout_seconds,
        max_retries=config.max_retries,
    )


def get_retrieval_service(
    settings: Settings | None = None,
    store: VectorStore | None = None,
    embedder: Embedder | None = None,
) -> RetrievalService:
    """
    Get retrieval service instance.

    Returns:
        RetrievalService: Retrieval service instance
    """
    settings = settings or get_settings()
    store = store or get_vector_store(settings)
    engine = SimilaritySearchEngine(
        store,
        dimension=settings.embedding.dimension,
        max_limit=settings.retrieval.max_limit,
    )
    return RetrievalService(
        embedder=embedder or get_embedder(settings),
        search_engine=engine,
        default_threshold=settings.retrieval.similarity_threshold,
        default_limit=settings.retrieval.max_results,
        history_turns=settings.retrieval.history_turns,
    )


def get_ingestion_service(
    settings: Settings | None = None,
    store: VectorStore | None = None,
    embedder: Embedder | None = None,
) -> DocumentIngestionService:
    """
    Get ingestion service instance.

    Returns:
        DocumentIngestionService: Ingestion service instance
    """
    settings = settings or get_settings()
    return DocumentIngestionService(
        store=store or get_vector_store(settings),
        embedder=embedder or get_embedder(settings),
        chunker=TextChunker(
            chunk_size=settings.ingestion.chunk_size,
            chunk_overlap=settings.ingestion.chunk_overlap,
        ),
        sync_embed_limit=settings.ingestion.sync_embed_limit,
    )


def init_logging(settings: Settings | None = None) -> None:
    """Configure root logging from LOG_LEVEL."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
