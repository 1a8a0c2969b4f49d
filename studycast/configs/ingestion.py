"""
Ingestion configuration settings.

Batch and file-size limits enforced before any pipeline stage runs.

Dependencies: pydantic, pydantic_settings
System role: Upload admission policy
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from studycast.configs.base import BaseSettings


class IngestionSettings(BaseSettings):
    """Upload batch limits."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    max_batch_size: int = Field(default=5, ge=1, description="Maximum files per submission")
    max_file_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Maximum size of a single source file in bytes (10 MiB)",
    )
    max_retained_tasks: int = Field(
        default=200,
        ge=1,
        description="Tasks kept for polling before the oldest finished ones are dropped",
    )
