"""
Quiz session state machine.

One user working through one quiz. Answer selection and navigation are
in-memory only; the single durable write is the QuizAttempt produced by
complete().

States: selecting -> generating | loaded -> answering -> completed

Dependencies: asyncio, studycast.boundary.store
System role: Quiz answering, scoring and attempt persistence
"""

import asyncio
import logging
import uuid

from studycast.boundary.store import ContentStore
from studycast.core.exceptions import QuizSessionError, StorageError
from studycast.models.quiz import (
    OPTION_COUNT,
    NavigationDirection,
    Quiz,
    QuizAttempt,
    QuizQuestionView,
    QuizSessionResponse,
    QuizSessionState,
)

logger = logging.getLogger(__name__)


def score_answers(quiz: Quiz, answers: dict[str, int]) -> int:
    """
    Percentage of correct answers, rounded half up.

    Unanswered questions count as wrong.
    """
    total = len(quiz.questions)
    correct = sum(
        1 for question in quiz.questions
        if answers.get(question.id) == question.correct_option_index
    )
    # floor(100 * correct / total + 0.5) in integer arithmetic
    return (200 * correct + total) // (2 * total)


class QuizSession:
    """
    A single pass through a quiz.

    Created by QuizEngine; callers only see sessions already in the
    answering state.
    """

    def __init__(self, user_id: str, store: ContentStore) -> None:
        """
        Initialize session in the selecting state.

        Args:
            user_id: User taking the quiz
            store: Content store receiving the attempt
        """
        self.session_id = uuid.uuid4()
        self.user_id = user_id
        self.store = store
        self.state = QuizSessionState.SELECTING
        self.quiz: Quiz | None = None
        self.question_index = 0
        self.answers: dict[str, int] = {}
        self.attempt: QuizAttempt | None = None
        self._complete_lock = asyncio.Lock()

    # Lifecycle transitions driven by QuizEngine

    def mark_generating(self) -> None:
        self._require(QuizSessionState.SELECTING, "start generating")
        self.state = QuizSessionState.GENERATING

    def load(self, quiz: Quiz) -> None:
        if self.state not in (QuizSessionState.SELECTING, QuizSessionState.GENERATING):
            raise QuizSessionError(f"Cannot load a quiz while {self.state.value}")
        self.quiz = quiz
        self.state = QuizSessionState.LOADED

    def begin(self) -> None:
        self._require(QuizSessionState.LOADED, "begin answering")
        self.question_index = 0
        self.answers = {}
        self.state = QuizSessionState.ANSWERING

    # Answering

    def select_answer(self, question_id: str, option_index: int) -> None:
        """
        Record (or replace) the answer to a question.

        Raises:
            QuizSessionError: If not answering, the question is unknown or the
                option index is outside [0, 4)
        """
        self._require(QuizSessionState.ANSWERING, "select an answer")
        if question_id not in self.quiz.question_ids:
            raise QuizSessionError(
                f"Unknown question: {question_id}",
                details={"quiz_id": str(self.quiz.id), "question_id": question_id},
            )
        if isinstance(option_index, bool) or not 0 <= option_index < OPTION_COUNT:
            raise QuizSessionError(
                f"Option index out of range: {option_index}",
                details={"question_id": question_id},
            )
        self.answers[question_id] = option_index

    def navigate(self, direction: NavigationDirection) -> int:
        """
        Move the question pointer one step.

        Returns:
            int: New question index

        Raises:
            QuizSessionError: If not answering or the move leaves [0, count)
        """
        self._require(QuizSessionState.ANSWERING, "navigate")
        direction = NavigationDirection(direction)
        last = len(self.quiz.questions) - 1

        if direction == NavigationDirection.PREVIOUS:
            if self.question_index == 0:
                raise QuizSessionError("Already at the first question")
            self.question_index -= 1
        else:
            if self.question_index == last:
                raise QuizSessionError("Already at the last question; complete the quiz instead")
            self.question_index += 1
        return self.question_index

    async def complete(self) -> QuizAttempt:
        """
        Score the session and persist exactly one attempt.

        Calling again after success returns the same attempt without writing.
        If the write fails the session stays in answering so the caller can retry.

        Raises:
            QuizSessionError: If the session never reached answering
            StorageError: If the attempt could not be persisted
        """
        async with self._complete_lock:
            if self.state == QuizSessionState.COMPLETED:
                return self.attempt
            self._require(QuizSessionState.ANSWERING, "complete")

            attempt = QuizAttempt(
                quiz_id=self.quiz.id,
                user_id=self.user_id,
                score=score_answers(self.quiz, self.answers),
                answers=dict(self.answers),
            )
            try:
                self.attempt = await self.store.create_quiz_attempt(attempt)
            except StorageError:
                logger.error(
                    f"{__name__}:complete - Attempt not persisted, session stays answering",
                    extra={"session_id": str(self.session_id), "quiz_id": str(self.quiz.id)},
                )
                raise

            self.state = QuizSessionState.COMPLETED
            logger.info(
                f"{__name__}:complete - Quiz completed",
                extra={
                    "session_id": str(self.session_id),
                    "quiz_id": str(self.quiz.id),
                    "score": self.attempt.score,
                },
            )
            return self.attempt

    def restart(self) -> "QuizSession":
        """
        Fresh session on the same quiz, already answering question 0.

        Raises:
            QuizSessionError: If this session has no quiz yet
        """
        if self.quiz is None:
            raise QuizSessionError("Cannot restart a session without a quiz")
        session = QuizSession(self.user_id, self.store)
        session.load(self.quiz)
        session.begin()
        return session

    # Views

    def to_response(self) -> QuizSessionResponse:
        """Snapshot for API responses; correct answers stay hidden until completion."""
        current = None
        if self.quiz is not None and self.state == QuizSessionState.ANSWERING:
            question = self.quiz.questions[self.question_index]
            current = QuizQuestionView(id=question.id, text=question.text, options=list(question.options))

        return QuizSessionResponse(
            session_id=self.session_id,
            quiz_id=self.quiz.id,
            title=self.quiz.title,
            state=self.state,
            question_index=self.question_index,
            question_count=len(self.quiz.questions),
            current_question=current,
            answers=dict(self.answers),
            attempt=self.attempt,
        )

    def _require(self, state: QuizSessionState, action: str) -> None:
        if self.state != state:
            raise QuizSessionError(
                f"Cannot {action} while {self.state.value}",
                details={"session_id": str(self.session_id), "state": self.state.value},
            )
