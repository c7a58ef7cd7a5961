"""
Document ingestion service.

Chunks extracted text, embeds the primary vector and a bounded prefix of
chunks within the request, and persists everything to the vector store.
Chunks past the prefix are stored with a null vector and stay invisible to
search until backfill_chunks() embeds them; nothing schedules that call.

Dependencies: smartnotes.core, smartnotes.boundary.vdb
System role: Ingestion orchestration (chunk -> embed -> store)
"""

import logging
import time
import uuid

from smartnotes.boundary.vdb.base import VectorStore
from smartnotes.core.chunker import TextChunker
from smartnotes.core.embedder import Embedder
from smartnotes.core.exceptions import DocumentNotFoundError, EmbeddingError
from smartnotes.models.document import Document, DocumentChunk, DocumentStatus
from smartnotes.models.ingestion import BackfillResult, IngestionResult

logger = logging.getLogger(__name__)

DEFAULT_SYNC_EMBED_LIMIT = 5


class DocumentIngestionService:
    """
    Ingestion pipeline for uploaded document text.

    Status flow: PROCESSING while chunks are written, then COMPLETED when a
    primary embedding exists or FAILED when none could be produced. A
    document still in PROCESSING was interrupted mid-ingestion.
    """

    def __init__(
        self,
        store: VectorStore,
        embedder: Embedder,
        chunker: TextChunker | None = None,
        sync_embed_limit: int = DEFAULT_SYNC_EMBED_LIMIT,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            store: Vector store receiving documents and chunks
            embedder: Embedder for primary and chunk vectors
            chunker: Chunker; defaults to 4000/200 windows
            sync_embed_limit: Leading chunks embedded within the request
        """
        self.store = store
        self.embedder = embedder
        self.chunker = chunker or TextChunker()
        self.sync_embed_limit = sync_embed_limit

    async def _try_embed(self, text: str, document_id: uuid.UUID, chunk_index: int | None):
        try:
            return await self.embedder.embed(text)
        except EmbeddingError as e:
            logger.warning(
                f"{__name__}:ingest - Embedding failed, storing null vector",
                extra={
                    "document_id": str(document_id),
                    "chunk_index": chunk_index,
                    "error_type": type(e).__name__,
                    "error_msg": str(e),
                },
            )
            return None

    async def ingest(
        self,
        owner_id: str,
        title: str,
        text: str,
        subject_id: str | None = None,
        description: str | None = None,
    ) -> IngestionResult:
        """
        Ingest extracted document text.

        Args:
            owner_id: Owning user
            title: Document title
            text: Extracted text (may be empty)
            subject_id: Optional subject
            description: Optional description

        Returns:
            IngestionResult: Final status and chunk counts

        Raises:
            VectorStoreError: Store write failed
        """
        start_time = time.perf_counter()

        document = await self.store.upsert_document(
            Document(
                owner_id=owner_id,
                subject_id=subject_id,
                title=title,
                description=description,
                content=text,
                status=DocumentStatus.PROCESSING,
            )
        )

        chunks = self.chunker.chunk(text)

        primary = None
        if chunks:
            primary = await self._try_embed(chunks[0], document.id, None)
        if primary is None:
            logger.error(
                f"{__name__}:ingest - No primary embedding, document will be marked failed",
                extra={"document_id": str(document.id), "chunk_count": len(chunks)},
            )

        embedded_count = 0
        pending: list[int] = []
        for index, content in enumerate(chunks):
            vector = None
            if index < self.sync_embed_limit:
                if index == 0 and primary is not None:
                    vector = primary
                else:
                    vector = await self._try_embed(content, document.id, index)

            await self.store.upsert_chunk(
                DocumentChunk(
                    document_id=document.id,
                    chunk_index=index,
                    content=content,
                    embedding=vector,
                )
            )
            if vector is None:
                pending.append(index)
            else:
                embedded_count += 1

        document.embedding = primary
        document.status = DocumentStatus.COMPLETED if primary is not None else DocumentStatus.FAILED
        document.chunk_count = len(chunks)
        document.embedded_chunk_count = embedded_count
        document = await self.store.upsert_document(document)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:ingest - Document ingested",
            extra={
                "document_id": str(document.id),
                "status": document.status.value,
                "chunk_count": len(chunks),
                "embedded_chunk_count": embedded_count,
                "processing_time_ms": round(elapsed_ms, 1),
            },
        )

        return IngestionResult(
            document_id=document.id,
            status=document.status,
            chunk_count=len(chunks),
            embedded_chunk_count=embedded_count,
            pending_chunk_indices=pending,
            processing_time_ms=elapsed_ms,
        )

    async def backfill_chunks(
        self,
        owner_id: str,
        document_id: uuid.UUID,
        batch_size: int | None = None,
    ) -> BackfillResult:
        """
        Embed chunks that were stored without a vector.

        Args:
            owner_id: Owner of the document
            document_id: Document to backfill
            batch_size: Maximum chunks to embed in this pass (all if None)

        Returns:
            BackfillResult: Embedded and failed chunk indices, remaining count

        Raises:
            DocumentNotFoundError: Document missing or not owned by owner_id
        """
        document = await self.store.get_document(owner_id, document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))

        result = BackfillResult(document_id=document_id)
        for chunk in await self.store.list_unembedded_chunks(owner_id, document_id, batch_size):
            vector = await self._try_embed(chunk.content, document_id, chunk.chunk_index)
            if vector is None:
                result.failed_chunk_indices.append(chunk.chunk_index)
                continue
            chunk.embedding = vector
            await self.store.upsert_chunk(chunk)
            result.embedded_chunk_indices.append(chunk.chunk_index)

        if result.embedded_chunk_indices:
            document.embedded_chunk_count = await self.store.count_embedded_chunks(
                owner_id, document_id
            )
            await self.store.upsert_document(document)

        result.remaining = len(await self.store.list_unembedded_chunks(owner_id, document_id))
        return result

    async def delete_document(self, owner_id: str, document_id: uuid.UUID) -> bool:
        """Delete an owned document and its chunks."""
        return await self.store.delete_document(owner_id, document_id)
