"""
Shared settings base.

Every studycast settings class reads the same .env file, case-insensitively,
and ignores variables meant for other sections. Subclasses add an env_prefix.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Common .env handling plus the process-wide log level (LOG_LEVEL)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level passed to configure_logging (DEBUG, INFO, WARNING, ...)",
    )
