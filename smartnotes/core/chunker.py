"""
Fixed-window text chunker.

Splits extracted document text into overlapping character windows. Chunk k
starts at k * (chunk_size - chunk_overlap); dropping the first chunk_overlap
characters of every chunk after the first and concatenating reconstructs the
input exactly.

Dependencies: smartnotes.core.exceptions
System role: First stage of document ingestion
"""

from smartnotes.core.exceptions import InvalidParameterError

DEFAULT_CHUNK_SIZE = 4000
DEFAULT_CHUNK_OVERLAP = 200


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[str]:
    """
    Split text into overlapping fixed-size windows.

    Args:
        text: Raw extracted text
        chunk_size: Maximum characters per chunk
        chunk_overlap: Characters shared between consecutive chunks

    Returns:
        list[str]: Ordered chunks; empty for empty text

    Raises:
        InvalidParameterError: When not 0 <= chunk_overlap < chunk_size
    """
    _validate_window(chunk_size, chunk_overlap)

    if not text:
        return []
    if len(text) <= chunk_size:
        return [text]

    stride = chunk_size - chunk_overlap
    chunks = []
    start = 0
    while True:
        end = min(start + chunk_size, len(text))
        chunks.append(text[start:end])
        if end == len(text):
            break
        start += stride

    return chunks


def _validate_window(chunk_size: int, chunk_overlap: int) -> None:
    if chunk_size <= 0:
        raise InvalidParameterError(
            f"chunk_size must be positive, got {chunk_size}",
            field="chunk_size",
        )
    if chunk_overlap < 0 or chunk_overlap >= chunk_size:
        raise InvalidParameterError(
            f"chunk_overlap must satisfy 0 <= overlap < chunk_size, got {chunk_overlap}",
            field="chunk_overlap",
            details={"chunk_size": chunk_size},
        )


class TextChunker:
    """Chunker bound to one window configuration."""

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
        """
        Initialize chunker with window configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            InvalidParameterError: When the window configuration is invalid
        """
        _validate_window(chunk_size, chunk_overlap)
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def chunk(self, text: str) -> list[str]:
        """Split text using the configured window."""
        return chunk_text(text, self.chunk_size, self.chunk_overlap)

    def reconstruct(self, chunks: list[str]) -> str:
        """Rebuild the original text from chunks produced by this chunker."""
        if not chunks:
            return ""
        return chunks[0] + "".join(c[self.chunk_overlap:] for c in chunks[1:])
