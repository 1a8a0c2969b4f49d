"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, CreatedAtMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(): Async connection management
  - create_all_tables(): Schema creation
  - DocumentModel, SummaryModel, QuizModel, QuizAttemptModel, ConversationModel

Dependencies: sqlalchemy, studycast.configs
System role: Database adapter backing the SQL content store.
"""

from studycast.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from studycast.boundary.db.connection import get_async_engine, get_async_session_factory
from studycast.boundary.db.create_tables import create_all_tables
from studycast.boundary.db.models import (
    ConversationModel,
    DocumentModel,
    QuizAttemptModel,
    QuizModel,
    SummaryModel,
)

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_engine",
    "get_async_session_factory",
    "create_all_tables",
    # Models
    "ConversationModel",
    "DocumentModel",
    "QuizAttemptModel",
    "QuizModel",
    "SummaryModel",
]
