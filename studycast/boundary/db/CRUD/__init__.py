"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from studycast.boundary.db.CRUD import document_crud, quiz_crud

    # Use singleton instances
    document = await document_crud.get_by_id(db, document_id)
"""

from studycast.boundary.db.CRUD.base_crud import BaseCRUD
from studycast.boundary.db.CRUD.conversation_crud import ConversationCRUD, conversation_crud
from studycast.boundary.db.CRUD.document_crud import (
    DocumentCRUD,
    SummaryCRUD,
    document_crud,
    summary_crud,
)
from studycast.boundary.db.CRUD.quiz_crud import (
    QuizAttemptCRUD,
    QuizCRUD,
    quiz_attempt_crud,
    quiz_crud,
)

__all__ = [
    "BaseCRUD",
    "ConversationCRUD",
    "conversation_crud",
    "DocumentCRUD",
    "document_crud",
    "SummaryCRUD",
    "summary_crud",
    "QuizCRUD",
    "quiz_crud",
    "QuizAttemptCRUD",
    "quiz_attempt_crud",
]
