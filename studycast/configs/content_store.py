"""
Content store configuration.

Selects the persistence backend for documents, summaries, quizzes,
quiz attempts and conversations.

Dependencies: pydantic, pydantic_settings
System role: Content store selection
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from studycast.configs.base import BaseSettings


class ContentStoreSettings(BaseSettings):
    """Content store backend selection."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CONTENT_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="sql",
        description="Content store backend: 'sql' for SQLAlchemy, 'memory' for local dev",
    )
    create_tables: bool = Field(
        default=True,
        description="Create missing tables on startup (sql store only)",
    )
