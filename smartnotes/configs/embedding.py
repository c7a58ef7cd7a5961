"""
Embedding provider configuration settings.

Selects the embedding backend and model, and bounds every remote call
(input length, timeout, retries).

Dependencies: pydantic, pydantic_settings
System role: Embedding provider configuration for ingestion and retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from smartnotes.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration (OpenAI, Google Gemini or Bedrock)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="openai",
        description="Embedding provider: 'openai', 'google' or 'bedrock'",
    )
    model: str = Field(
        default="text-embedding-ada-002",
        description="Provider model ID used for both documents and queries",
    )
    dimension: int = Field(
        default=1536,
        description="Embedding vector dimension shared by every stored vector",
        gt=0,
    )
    api_key: str | None = Field(
        default=None,
        description="Provider API key; unset means the provider is unavailable",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region (bedrock provider only)",
    )
    max_input_chars: int = Field(
        default=8000,
        description="Input text is truncated to this many characters before sending",
        gt=0,
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="Per-attempt timeout for a single embedding call",
        gt=0,
    )
    max_retries: int = Field(
        default=3,
        description="Attempts per embedding call before giving up",
        ge=1,
    )
