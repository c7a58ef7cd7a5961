"""
Document ingestion configuration settings.

Chunk window sizing and the bounded prefix of chunks embedded synchronously
during an ingestion request.

Dependencies: pydantic, pydantic_settings
System role: Ingestion pipeline configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """Settings for document ingestion."""

    model_config = SettingsConfigDict(
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(
        default=4000,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        description="Characters shared between consecutive chunks",
    )
    sync_embed_limit: int = Field(
        default=5,
        description="Number of leading chunks embedded within the ingestion request",
        ge=0,
    )
