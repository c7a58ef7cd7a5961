"""
Shared settings base.

Every settings group reads the process environment and an optional `.env`
file, case-insensitively, ignoring unknown keys.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Environment-backed settings with deployment-wide fields."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="development, staging or production")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO", description="Root log level passed to configure_logging()")
