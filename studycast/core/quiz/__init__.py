"""Quiz generation, validation and session state machine."""

from studycast.core.quiz.quiz_engine import QuizEngine
from studycast.core.quiz.quiz_schema import parse_quiz_payload, strip_code_fence
from studycast.core.quiz.quiz_session import QuizSession, score_answers

__all__ = [
    "QuizEngine",
    "QuizSession",
    "parse_quiz_payload",
    "score_answers",
    "strip_code_fence",
]
