"""
Content store factory for selecting between in-memory (dev) and SQL (prod).

Depends on CONTENT_STORE_BACKEND environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: studycast.boundary.store, studycast.boundary.db, studycast.configs
System role: Content store instantiation and selection
"""

import logging

from studycast.boundary.db.connection import get_async_engine, get_async_session_factory
from studycast.boundary.db.create_tables import create_all_tables
from studycast.boundary.store.content_store import ContentStore
from studycast.boundary.store.memory_store import InMemoryContentStore
from studycast.boundary.store.sql_store import SQLContentStore
from studycast.configs import get_settings

logger = logging.getLogger(__name__)


async def get_content_store() -> ContentStore:
    """
    Factory function to get content store based on environment configuration.

    Creates missing tables for the SQL store when CONTENT_STORE_CREATE_TABLES
    is enabled.

    Returns:
        InMemoryContentStore or SQLContentStore: Configured content store instance

    Raises:
        ValueError: If CONTENT_STORE_BACKEND is invalid
    """
    settings = get_settings()
    backend = settings.content_store.backend.lower()

    if backend == "memory":
        logger.info(
            f"{__name__}:get_content_store - Creating in-memory content store (local dev mode)"
        )
        return InMemoryContentStore()

    elif backend == "sql":
        logger.info(f"{__name__}:get_content_store - Creating SQL content store")
        engine = get_async_engine()
        if settings.content_store.create_tables:
            await create_all_tables(engine)
        return SQLContentStore(get_async_session_factory(engine), engine=engine)

    else:
        raise ValueError(
            f"Invalid CONTENT_STORE_BACKEND: {backend}. "
            f"Must be 'memory' (dev) or 'sql' (production)."
        )
