"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides a cached accessor shared by the service container and logging setup.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from studycast.configs.base import BaseSettings
from studycast.configs.content_store import ContentStoreSettings
from studycast.configs.database import DatabaseSettings
from studycast.configs.ingestion import IngestionSettings
from studycast.configs.llm import LanguageModelSettings
from studycast.configs.speech import SpeechSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    content_store: ContentStoreSettings = ContentStoreSettings()
    ingestion: IngestionSettings = IngestionSettings()
    llm: LanguageModelSettings = LanguageModelSettings()
    speech: SpeechSettings = SpeechSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from studycast.configs import get_settings
        settings = get_settings()
    """
    return Settings()
