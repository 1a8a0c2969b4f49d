"""
SQLAlchemy-backed content store.

Each operation opens its own AsyncSession and transaction, so concurrent
pipelines and conversations never share a session. ORM rows are converted to
pydantic domain models before the session closes.

Dependencies: sqlalchemy, studycast.boundary.db
System role: Production content store backend
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from studycast.boundary.db.CRUD import (
    conversation_crud,
    document_crud,
    quiz_attempt_crud,
    quiz_crud,
    summary_crud,
)
from studycast.boundary.store.content_store import ContentStore
from studycast.core.exceptions import StorageError
from studycast.models.conversation import ChatMessage, Conversation
from studycast.models.document import Document, Summary
from studycast.models.quiz import Quiz, QuizAttempt

logger = logging.getLogger(__name__)


class SQLContentStore(ContentStore):
    """ContentStore over the SQLAlchemy async ORM."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ) -> None:
        """
        Initialize SQL content store.

        Args:
            session_factory: Factory producing one AsyncSession per operation
            engine: Engine owned by this store and disposed on close
        """
        self._session_factory = session_factory
        self._engine = engine

    async def close(self) -> None:
        """Dispose the owned engine's connection pool."""
        if self._engine is None:
            return
        await self._engine.dispose()
        logger.info(f"{__name__}:close - Engine disposed")

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Run one operation in its own committed transaction."""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise StorageError(
                f"Content store operation failed: {e}",
                operation=operation,
            ) from e

    # Documents

    async def create_document(self, document: Document) -> Document:
        async with self._transaction("create_document") as session:
            row = await document_crud.create(session, **document.model_dump())
            return Document.model_validate(row, from_attributes=True)

    async def get_document(self, document_id: UUID) -> Document | None:
        async with self._transaction("get_document") as session:
            row = await document_crud.get_by_id(session, document_id)
            return Document.model_validate(row, from_attributes=True) if row else None

    async def list_documents(self, owner_id: str, limit: int | None = None) -> list[Document]:
        async with self._transaction("list_documents") as session:
            rows = await document_crud.get_recent_by_owner(session, owner_id, limit)
            return [Document.model_validate(row, from_attributes=True) for row in rows]

    async def count_documents(self, owner_id: str) -> int:
        async with self._transaction("count_documents") as session:
            return await document_crud.count_by_owner(session, owner_id)

    # Summaries

    async def create_summary(self, summary: Summary) -> Summary:
        async with self._transaction("create_summary") as session:
            row = await summary_crud.create(session, **summary.model_dump())
            return Summary.model_validate(row, from_attributes=True)

    async def attach_narration(self, summary_id: UUID, narration_ref: str) -> Summary:
        async with self._transaction("attach_narration") as session:
            row = await summary_crud.set_narration_ref(session, summary_id, narration_ref)
            if row is None:
                raise StorageError(f"Summary not found: {summary_id}", operation="attach_narration")
            return Summary.model_validate(row, from_attributes=True)

    async def list_summaries(self, document_id: UUID) -> list[Summary]:
        async with self._transaction("list_summaries") as session:
            rows = await summary_crud.get_by_document_id(session, document_id)
            return [Summary.model_validate(row, from_attributes=True) for row in rows]

    # Quizzes

    async def create_quiz(self, quiz: Quiz) -> Quiz:
        async with self._transaction("create_quiz") as session:
            row = await quiz_crud.create(
                session,
                id=quiz.id,
                document_id=quiz.document_id,
                title=quiz.title,
                questions=[question.model_dump(mode="json") for question in quiz.questions],
                created_at=quiz.created_at,
            )
            return Quiz.model_validate(row, from_attributes=True)

    async def get_quiz(self, quiz_id: UUID) -> Quiz | None:
        async with self._transaction("get_quiz") as session:
            row = await quiz_crud.get_by_id(session, quiz_id)
            return Quiz.model_validate(row, from_attributes=True) if row else None

    async def find_latest_quiz(self, document_id: UUID) -> Quiz | None:
        async with self._transaction("find_latest_quiz") as session:
            row = await quiz_crud.get_latest_for_document(session, document_id)
            return Quiz.model_validate(row, from_attributes=True) if row else None

    async def create_quiz_attempt(self, attempt: QuizAttempt) -> QuizAttempt:
        async with self._transaction("create_quiz_attempt") as session:
            row = await quiz_attempt_crud.create(session, **attempt.model_dump())
            return QuizAttempt.model_validate(row, from_attributes=True)

    async def list_quiz_attempts(self, user_id: str, limit: int | None = None) -> list[QuizAttempt]:
        async with self._transaction("list_quiz_attempts") as session:
            rows = await quiz_attempt_crud.get_recent_by_user(session, user_id, limit)
            return [QuizAttempt.model_validate(row, from_attributes=True) for row in rows]

    async def count_quiz_attempts(self, user_id: str) -> int:
        async with self._transaction("count_quiz_attempts") as session:
            return await quiz_attempt_crud.count_by_user(session, user_id)

    # Conversations

    async def create_conversation(self, conversation: Conversation) -> Conversation:
        async with self._transaction("create_conversation") as session:
            row = await conversation_crud.create(
                session,
                id=conversation.id,
                document_id=conversation.document_id,
                user_id=conversation.user_id,
                messages=_serialize_messages(conversation.messages),
                created_at=conversation.created_at,
                updated_at=conversation.updated_at,
            )
            return Conversation.model_validate(row, from_attributes=True)

    async def get_conversation(self, conversation_id: UUID) -> Conversation | None:
        async with self._transaction("get_conversation") as session:
            row = await conversation_crud.get_by_id(session, conversation_id)
            return Conversation.model_validate(row, from_attributes=True) if row else None

    async def find_latest_conversation(
        self,
        document_id: UUID,
        user_id: str,
    ) -> Conversation | None:
        async with self._transaction("find_latest_conversation") as session:
            row = await conversation_crud.get_latest_for_pair(session, document_id, user_id)
            return Conversation.model_validate(row, from_attributes=True) if row else None

    async def list_conversations(self, user_id: str, limit: int | None = None) -> list[Conversation]:
        async with self._transaction("list_conversations") as session:
            rows = await conversation_crud.get_recent_by_user(session, user_id, limit)
            return [Conversation.model_validate(row, from_attributes=True) for row in rows]

    async def save_conversation_messages(
        self,
        conversation_id: UUID,
        messages: list[ChatMessage],
        updated_at: datetime,
    ) -> Conversation:
        async with self._transaction("save_conversation_messages") as session:
            row = await conversation_crud.replace_messages(
                session,
                conversation_id,
                _serialize_messages(messages),
                updated_at,
            )
            if row is None:
                raise StorageError(
                    f"Conversation not found: {conversation_id}",
                    operation="save_conversation_messages",
                )
            return Conversation.model_validate(row, from_attributes=True)


def _serialize_messages(messages: list[ChatMessage]) -> list[dict]:
    """JSON-safe message list for the messages column."""
    return [message.model_dump(mode="json") for message in messages]
