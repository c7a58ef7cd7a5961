"""
Gemini embeddings pinned to the vector column dimension.

GoogleGenerativeAIEmbeddings only honours output_dimensionality per call,
so this subclass injects the configured dimension into every query and
document call. Without it gemini-embedding-001 returns 3072 floats and the
Embedder rejects the vector.

Dependencies: langchain_google_genai
System role: Google provider adapter for the Embedder
"""

import logging
from typing import List

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """Google embeddings that always request the same output size."""

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs,
    ) -> None:
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.debug(
            f"{__name__}:__init__ - model={model} dimension={output_dimensionality}"
        )

    def embed_query(self, text: str, **kwargs) -> List[float]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_query(text, **kwargs)

    async def aembed_query(self, text: str, **kwargs) -> List[float]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return await super().aembed_query(text, **kwargs)

    def embed_documents(self, texts: List[str], **kwargs) -> List[List[float]]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_documents(texts, **kwargs)
