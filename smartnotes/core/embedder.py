"""
Embedding generator.

Turns text into a fixed-length vector through an injected LangChain
Embeddings client. Input is truncated to the provider limit before sending,
transient failures are retried with exponential backoff, and every returned
vector is checked against the configured dimension.

Dependencies: langchain_core, tenacity, smartnotes.core.exceptions
System role: Embedding adapter shared by ingestion and retrieval
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from smartnotes.core.exceptions import (
    EmbeddingGenerationFailed,
    EmbeddingProviderUnavailable,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_CHARS = 8000


class Embedder:
    """
    Embedding generator over an explicitly constructed provider client.

    A None client means the provider is not configured; every call then
    raises EmbeddingProviderUnavailable.
    """

    def __init__(
        self,
        client: Embeddings | None,
        dimension: int,
        max_input_chars: int = DEFAULT_MAX_INPUT_CHARS,
        timeout_seconds: float = 30.0,
        max_retries: int = 3,
        retry_initial_wait: float = 1.0,
    ) -> None:
        """
        Initialize embedder.

        Args:
            client: LangChain Embeddings implementation, or None if unconfigured
            dimension: Expected vector length D
            max_input_chars: Text is cut to this many characters before sending
            timeout_seconds: Per-attempt timeout
            max_retries: Attempts before giving up
            retry_initial_wait: First backoff delay in seconds
        """
        self._client = client
        self.dimension = dimension
        self.max_input_chars = max_input_chars
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.retry_initial_wait = retry_initial_wait

    @property
    def is_available(self) -> bool:
        return self._client is not None

    def prepare_input(self, text: str) -> str:
        """Truncate text to the provider input limit."""
        return text[: self.max_input_chars]

    async def embed(self, text: str) -> list[float]:
        """
        Generate embedding for text.

        Args:
            text: Text to embed (truncated silently if too long)

        Returns:
            list[float]: Vector of length self.dimension

        Raises:
            EmbeddingProviderUnavailable: No client configured
            EmbeddingGenerationFailed: Remote call failed, timed out, or
                returned a vector of the wrong dimension
        """
        if self._client is None:
            raise EmbeddingProviderUnavailable()

        payload = self.prepare_input(text)
        try:
            vector = await self._embed_with_retry(payload)
        except RetryError as e:
            last = e.last_attempt.exception()
            raise EmbeddingGenerationFailed(
                f"Failed to generate embedding: {last}",
                details={"attempts": self.max_retries, "error_type": type(last).__name__},
            ) from last

        if len(vector) != self.dimension:
            raise EmbeddingGenerationFailed(
                "Embedding has unexpected dimension",
                details={"expected": self.dimension, "actual": len(vector)},
            )
        return [float(v) for v in vector]

    async def _embed_with_retry(self, payload: str) -> list[float]:
        async for attempt in AsyncRetrying(
            retry=retry_if_not_exception_type(EmbeddingProviderUnavailable),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential_jitter(
                initial=self.retry_initial_wait,
                max=30,
                jitter=self.retry_initial_wait,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:embed - Retry {retry_state.attempt_number}/{self.max_retries} "
                f"after {type(retry_state.outcome.exception()).__name__}"
            ),
        ):
            with attempt:
                return await asyncio.wait_for(
                    self._client.aembed_query(payload),
                    timeout=self.timeout_seconds,
                )
