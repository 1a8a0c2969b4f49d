"""
Quiz domain models and schemas.

Quizzes are generated lazily per document and reused. Attempts are
written once when a quiz session completes.

Dependencies: pydantic
System role: Quiz, question and attempt contracts
"""

import enum
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from studycast.models.common import utc_now

OPTION_COUNT = 4


class QuizQuestion(BaseModel):
    """Multiple-choice question with exactly four options."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str = Field(min_length=1)
    options: list[str] = Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correct_option_index: int = Field(ge=0, lt=OPTION_COUNT)
    explanation: str | None = None


class Quiz(BaseModel):
    """Ordered set of questions generated for one document."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    document_id: uuid.UUID
    title: str
    questions: list[QuizQuestion] = Field(min_length=1)
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("questions")
    @classmethod
    def question_ids_unique(cls, questions: list[QuizQuestion]) -> list[QuizQuestion]:
        ids = [question.id for question in questions]
        if len(set(ids)) != len(ids):
            raise ValueError("question ids must be unique")
        return questions

    @property
    def question_ids(self) -> set[str]:
        return {question.id for question in self.questions}


class QuizAttempt(BaseModel):
    """Scored, completed pass through a quiz (immutable)."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    quiz_id: uuid.UUID
    user_id: str
    score: int = Field(ge=0, le=100)
    answers: dict[str, int] = Field(default_factory=dict)
    completed_at: datetime = Field(default_factory=utc_now)


class QuizSessionState(str, enum.Enum):
    """Quiz session lifecycle."""

    SELECTING = "selecting"
    GENERATING = "generating"
    LOADED = "loaded"
    ANSWERING = "answering"
    COMPLETED = "completed"


class NavigationDirection(str, enum.Enum):
    """Question pointer movement."""

    NEXT = "next"
    PREVIOUS = "previous"


class StartQuizSessionRequest(BaseModel):
    """Request schema for opening a quiz session."""

    document_id: uuid.UUID
    user_id: str = Field(min_length=1)


class SelectAnswerRequest(BaseModel):
    """Request schema for answering the current quiz."""

    question_id: str
    option_index: int


class NavigateRequest(BaseModel):
    """Request schema for moving the question pointer."""

    direction: NavigationDirection


class QuizQuestionView(BaseModel):
    """Question as shown while answering (correct answer hidden)."""

    id: str
    text: str
    options: list[str]


class QuizSessionResponse(BaseModel):
    """Snapshot of a quiz session."""

    session_id: uuid.UUID
    quiz_id: uuid.UUID
    title: str
    state: QuizSessionState
    question_index: int
    question_count: int
    current_question: QuizQuestionView | None
    answers: dict[str, int]
    attempt: QuizAttempt | None = None
