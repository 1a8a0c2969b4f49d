"""
Quiz engine.

Finds or generates the quiz for a document and opens quiz sessions on it.
Open sessions are owned by the engine instance and addressed by session id.

Dependencies: studycast.boundary.llm, studycast.boundary.store, studycast.core.quiz
System role: Quiz generation and session management
"""

import logging
from collections import OrderedDict
from uuid import UUID

from studycast.boundary.llm import LanguageModelService
from studycast.boundary.store import ContentStore
from studycast.core.exceptions import NotFoundError, QuizGenerationError
from studycast.core.quiz.quiz_schema import parse_quiz_payload
from studycast.core.quiz.quiz_session import QuizSession
from studycast.models.document import Document
from studycast.models.quiz import Quiz, QuizAttempt, QuizSessionState

logger = logging.getLogger(__name__)


class QuizEngine:
    """
    Quiz lookup-or-create plus the registry of open sessions.

    Quizzes are reused: the most recent quiz of a document is served to
    every later session instead of generating a new one.

    The registry holds at most max_open_sessions sessions. Past that, the
    least recently used completed session is dropped first, then the least
    recently used session of any state.
    """

    def __init__(
        self,
        store: ContentStore,
        language_model: LanguageModelService,
        question_count: int = 5,
        max_open_sessions: int = 1000,
    ) -> None:
        """
        Initialize quiz engine.

        Args:
            store: Content store for documents, quizzes and attempts
            language_model: Quiz generation backend
            question_count: Questions requested per generated quiz
            max_open_sessions: Sessions kept addressable by id
        """
        self.store = store
        self.language_model = language_model
        self.question_count = question_count
        self.max_open_sessions = max_open_sessions
        self._sessions: OrderedDict[UUID, QuizSession] = OrderedDict()

    async def get_or_create_quiz(self, document_id: UUID) -> Quiz:
        """
        Most recent quiz for a document, generating one if none exists.

        Raises:
            NotFoundError: If the document does not exist
            QuizGenerationError: If the model output is unusable; nothing is stored
        """
        quiz = await self.store.find_latest_quiz(document_id)
        if quiz is not None:
            return quiz
        document = await self._require_document(document_id)
        return await self._generate_quiz(document)

    async def start_session(self, document_id: UUID, user_id: str) -> QuizSession:
        """
        Open a session on the document's quiz, positioned at question 0.

        Raises:
            NotFoundError: If the document does not exist
            QuizGenerationError: If a quiz had to be generated and generation failed
        """
        session = QuizSession(user_id, self.store)

        quiz = await self.store.find_latest_quiz(document_id)
        if quiz is None:
            document = await self._require_document(document_id)
            session.mark_generating()
            quiz = await self._generate_quiz(document)

        session.load(quiz)
        session.begin()
        self._register(session)

        logger.info(
            f"{__name__}:start_session - Session opened",
            extra={"session_id": str(session.session_id), "quiz_id": str(quiz.id), "user_id": user_id},
        )
        return session

    def get_session(self, session_id: UUID) -> QuizSession:
        """
        Look up an open session.

        Raises:
            NotFoundError: If the session id is unknown
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError("quiz_session", session_id)
        self._sessions.move_to_end(session_id)
        return session

    def close_session(self, session_id: UUID) -> None:
        """
        Drop a session from the registry.

        Raises:
            NotFoundError: If the session id is unknown
        """
        if self._sessions.pop(session_id, None) is None:
            raise NotFoundError("quiz_session", session_id)

    def restart_session(self, session_id: UUID) -> QuizSession:
        """Open a fresh session on the same quiz as an existing one."""
        session = self.get_session(session_id).restart()
        self._register(session)
        return session

    @property
    def open_session_count(self) -> int:
        return len(self._sessions)

    async def recent_results(self, user_id: str, limit: int = 10) -> list[QuizAttempt]:
        """A user's most recent quiz attempts, newest first."""
        return await self.store.list_quiz_attempts(user_id, limit)

    def _register(self, session: QuizSession) -> None:
        self._sessions[session.session_id] = session
        while len(self._sessions) > self.max_open_sessions:
            victim = next(
                (sid for sid, s in self._sessions.items() if s.state == QuizSessionState.COMPLETED),
                next(iter(self._sessions)),
            )
            del self._sessions[victim]
            logger.debug(f"{__name__}:_register - Evicted quiz session {victim}")

    async def _require_document(self, document_id: UUID) -> Document:
        document = await self.store.get_document(document_id)
        if document is None:
            raise NotFoundError("document", document_id)
        return document

    async def _generate_quiz(self, document: Document) -> Quiz:
        try:
            raw = await self.language_model.generate_quiz(document.extracted_text, self.question_count)
        except QuizGenerationError:
            raise
        except Exception as e:
            logger.error(f"{__name__}:_generate_quiz - Model call failed: {type(e).__name__}: {e}")
            raise QuizGenerationError(f"Quiz generation failed: {e}", document_id=document.id) from e

        questions = parse_quiz_payload(raw, document_id=document.id)
        quiz = await self.store.create_quiz(
            Quiz(document_id=document.id, title=f"Quiz: {document.title}", questions=questions)
        )
        logger.info(
            f"{__name__}:_generate_quiz - Quiz stored",
            extra={"quiz_id": str(quiz.id), "document_id": str(document.id), "questions": len(questions)},
        )
        return quiz
