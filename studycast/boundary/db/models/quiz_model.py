"""
Quiz and quiz attempt ORM models.

Questions and answers are stored as JSON documents; their shape is
validated by the pydantic domain models before every write.

Dependencies: sqlalchemy, studycast.boundary.db.base
System role: Quiz and attempt persistence
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from studycast.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class QuizModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Quiz ORM model.

    No uniqueness constraint on document_id: lookup-or-create may produce
    more than one quiz per document, the newest one is used.

    Attributes:
        id: UUID primary key
        document_id: Source document
        title: Display title
        questions: JSON list of question objects
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "quizzes"

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    questions: Mapped[list] = mapped_column(JSON, nullable=False, default=list)


class QuizAttemptModel(Base, UUIDMixin):
    """
    Quiz attempt ORM model (quiz result).

    Attributes:
        id: UUID primary key
        quiz_id: Attempted quiz
        user_id: User who took the quiz
        score: Percentage score (0-100)
        answers: JSON object mapping question id to selected option index
        completed_at: Completion timestamp (UTC)
    """

    __tablename__ = "quiz_attempts"

    quiz_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    answers: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
