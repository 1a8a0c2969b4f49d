"""
Quiz and quiz attempt CRUD operations.

Dependencies: sqlalchemy, studycast.boundary.db.models
System role: Quiz and attempt persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studycast.boundary.db.CRUD.base_crud import BaseCRUD
from studycast.boundary.db.models.quiz_model import QuizAttemptModel, QuizModel


class QuizCRUD(BaseCRUD[QuizModel]):
    """CRUD operations for QuizModel."""

    def __init__(self) -> None:
        """Initialize QuizCRUD with QuizModel."""
        super().__init__(QuizModel)

    async def get_latest_for_document(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> QuizModel | None:
        """
        Retrieve the newest quiz generated for a document.

        Args:
            session: Async database session
            document_id: Document UUID

        Returns:
            QuizModel if one exists, None otherwise
        """
        quizzes = await self.get_recent(
            session,
            QuizModel.document_id == document_id,
            order_column=QuizModel.created_at,
            limit=1,
        )
        return quizzes[0] if quizzes else None


class QuizAttemptCRUD(BaseCRUD[QuizAttemptModel]):
    """CRUD operations for QuizAttemptModel (insert and read only)."""

    def __init__(self) -> None:
        """Initialize QuizAttemptCRUD with QuizAttemptModel."""
        super().__init__(QuizAttemptModel)

    async def get_recent_by_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int | None = None,
    ) -> Sequence[QuizAttemptModel]:
        """
        Retrieve a user's attempts, most recently completed first.

        Args:
            session: Async database session
            user_id: User identifier
            limit: Maximum number of attempts to return

        Returns:
            Sequence of QuizAttemptModels
        """
        return await self.get_recent(
            session,
            QuizAttemptModel.user_id == user_id,
            order_column=QuizAttemptModel.completed_at,
            limit=limit,
        )

    async def count_by_user(self, session: AsyncSession, user_id: str) -> int:
        return await self.count(session, QuizAttemptModel.user_id == user_id)


quiz_crud = QuizCRUD()
quiz_attempt_crud = QuizAttemptCRUD()
