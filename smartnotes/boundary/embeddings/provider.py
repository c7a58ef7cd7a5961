"""
Embedding client factory.

Builds the LangChain Embeddings client named by EmbeddingSettings.provider.
Returns None when the provider has no credentials, which the Embedder
reports as EmbeddingProviderUnavailable on first use.

Dependencies: langchain_openai, langchain_google_genai, langchain_aws, smartnotes.configs
System role: Embedding provider selection
"""

import logging

from langchain_core.embeddings import Embeddings

from smartnotes.configs.embedding import EmbeddingSettings

logger = logging.getLogger(__name__)


def build_embedding_client(config: EmbeddingSettings) -> Embeddings | None:
    """
    Create the embedding client for the configured provider.

    Args:
        config: Embedding settings

    Returns:
        Embeddings | None: Provider client, or None if not configured

    Raises:
        ValueError: If provider is unknown
    """
    provider = config.provider.lower()

    if provider == "openai":
        if not config.api_key:
            logger.warning(f"{__name__}:build_embedding_client - EMBEDDING_API_KEY not set")
            return None
        from langchain_openai import OpenAIEmbeddings

        kwargs = {}
        # ada-002 has a fixed size and rejects the dimensions parameter
        if not config.model.startswith("text-embedding-ada"):
            kwargs["dimensions"] = config.dimension
        return OpenAIEmbeddings(
            model=config.model,
            api_key=config.api_key,
            max_retries=0,
            **kwargs,
        )

    elif provider == "google":
        if not config.api_key:
            logger.warning(f"{__name__}:build_embedding_client - EMBEDDING_API_KEY not set")
            return None
        from smartnotes.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings

        return FixedDimensionEmbeddings(
            model=config.model,
            output_dimensionality=config.dimension,
            google_api_key=config.api_key,
        )

    elif provider == "bedrock":
        from langchain_aws import BedrockEmbeddings

        # credentials come from the AWS environment / IAM role
        return BedrockEmbeddings(
            model_id=config.model,
            region_name=config.region,
        )

    else:
        raise ValueError(
            f"Invalid EMBEDDING_PROVIDER: {provider}. "
            f"Must be 'openai', 'google' or 'bedrock'."
        )
