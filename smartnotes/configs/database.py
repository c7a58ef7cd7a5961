"""
PostgreSQL connection settings (POSTGRES_* variables).

The target database needs the pgvector extension available;
create_tables() enables it.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the pgvector store
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from smartnotes.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Connection and pool parameters for the async engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    user: str = Field(default="postgres")
    password: str = Field(default="postgres")
    db: str = Field(default="smartnotes", description="Database name")
    pool_size: int = Field(default=10)
    max_overflow: int = Field(default=20)
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = Field(default=False, description="Log every SQL statement")
    sslmode: str = Field(default="prefer", description="'require' adds ?ssl=require for asyncpg")

    @property
    def async_database_url(self) -> str:
        """postgresql+asyncpg URL built from the fields above."""
        query = "?ssl=require" if self.sslmode == "require" else ""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}{query}"
        )
