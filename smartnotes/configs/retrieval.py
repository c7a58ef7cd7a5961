"""
Retrieval configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Query-time defaults for similarity search
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Query-time retrieval defaults."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    similarity_threshold: float = Field(
        default=0.5,
        description="Minimum similarity (exclusive) for a hit to be returned",
    )
    max_results: int = Field(default=5, description="Default number of hits returned")
    max_limit: int = Field(default=100, description="Largest accepted result limit")
    history_turns: int = Field(
        default=5,
        description="Recent question/answer turns fused into the query text",
        ge=0,
    )
