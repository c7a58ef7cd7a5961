"""
Vector store configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Vector store backend selection
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (pgvector for prod, in-memory for dev/tests)."""

    store_type: str = Field(
        default="pgvector",
        description="Vector store type: 'pgvector' (PostgreSQL) or 'memory' (local dev)",
    )

    class Config:
        """Pydantic config."""

        env_prefix = "VECTOR_STORE_"
        case_sensitive = False
        extra = "ignore"
