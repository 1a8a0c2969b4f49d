"""
Database models package.

Exports:
  - DocumentModel: Extracted source documents
  - SummaryModel: Summaries with optional narration reference
  - QuizModel, QuizAttemptModel: Generated quizzes and scored attempts
  - ConversationModel: Document-grounded conversations

Dependencies: sqlalchemy, studycast.boundary.db.base
System role: Database model definitions for domain entities
"""

from studycast.boundary.db.models.conversation_model import ConversationModel
from studycast.boundary.db.models.document_model import DocumentModel
from studycast.boundary.db.models.quiz_model import QuizAttemptModel, QuizModel
from studycast.boundary.db.models.summary_model import SummaryModel

__all__ = [
    "ConversationModel",
    "DocumentModel",
    "QuizAttemptModel",
    "QuizModel",
    "SummaryModel",
]
