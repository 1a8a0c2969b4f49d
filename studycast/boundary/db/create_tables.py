"""
Database table creation helpers.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, studycast.configs
System role: Database schema initialization

Usage:
    python -m studycast.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from studycast.boundary.db.base import Base
from studycast.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from studycast.boundary.db.models import (  # noqa: F401
    ConversationModel,
    DocumentModel,
    QuizAttemptModel,
    QuizModel,
    SummaryModel,
)

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: calls CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Args:
        engine: Optional engine (created from settings if None)

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Content store tables created")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
