"""
In-memory content store for local development and tests.

Keeps domain models in dictionaries keyed by id. Every read and write goes
through a deep copy so stored state cannot be mutated by callers. There is
no await between read and write inside an operation, so each operation is
atomic on the event loop.

Dependencies: studycast.boundary.store.content_store
System role: Development content store backend
"""

from datetime import datetime
from itertools import count
from typing import TypeVar
from uuid import UUID

from pydantic import BaseModel

from studycast.boundary.store.content_store import ContentStore
from studycast.core.exceptions import StorageError
from studycast.models.conversation import ChatMessage, Conversation
from studycast.models.document import Document, Summary
from studycast.models.quiz import Quiz, QuizAttempt

EntityT = TypeVar("EntityT", bound=BaseModel)


class InMemoryContentStore(ContentStore):
    """Dictionary-backed ContentStore."""

    def __init__(self) -> None:
        self._documents: dict[UUID, Document] = {}
        self._summaries: dict[UUID, Summary] = {}
        self._quizzes: dict[UUID, Quiz] = {}
        self._attempts: dict[UUID, QuizAttempt] = {}
        self._conversations: dict[UUID, Conversation] = {}
        # Insertion sequence breaks timestamp ties in recency ordering
        self._sequence = count()
        self._inserted: dict[UUID, int] = {}

    def _insert(self, table: dict[UUID, EntityT], entity: EntityT, operation: str) -> EntityT:
        if entity.id in table:
            raise StorageError(f"Duplicate id {entity.id}", operation=operation)
        table[entity.id] = entity.model_copy(deep=True)
        self._inserted[entity.id] = next(self._sequence)
        return entity.model_copy(deep=True)

    @staticmethod
    def _copy(entity: EntityT | None) -> EntityT | None:
        return entity.model_copy(deep=True) if entity is not None else None

    def _recent(
        self,
        entities: list[EntityT],
        timestamp_field: str,
        limit: int | None,
    ) -> list[EntityT]:
        ordered = sorted(
            entities,
            key=lambda e: (getattr(e, timestamp_field), self._inserted[e.id]),
            reverse=True,
        )
        if limit is not None:
            ordered = ordered[:limit]
        return [entity.model_copy(deep=True) for entity in ordered]

    async def create_document(self, document: Document) -> Document:
        return self._insert(self._documents, document, "create_document")

    async def get_document(self, document_id: UUID) -> Document | None:
        return self._copy(self._documents.get(document_id))

    async def list_documents(self, owner_id: str, limit: int | None = None) -> list[Document]:
        owned = [d for d in self._documents.values() if d.owner_id == owner_id]
        return self._recent(owned, "created_at", limit)

    async def count_documents(self, owner_id: str) -> int:
        return sum(1 for d in self._documents.values() if d.owner_id == owner_id)

    async def create_summary(self, summary: Summary) -> Summary:
        return self._insert(self._summaries, summary, "create_summary")

    async def attach_narration(self, summary_id: UUID, narration_ref: str) -> Summary:
        summary = self._summaries.get(summary_id)
        if summary is None:
            raise StorageError(f"Summary not found: {summary_id}", operation="attach_narration")
        updated = summary.model_copy(update={"narration_ref": narration_ref})
        self._summaries[summary_id] = updated
        return updated.model_copy(deep=True)

    async def list_summaries(self, document_id: UUID) -> list[Summary]:
        matching = [s for s in self._summaries.values() if s.document_id == document_id]
        return self._recent(matching, "created_at", None)

    async def create_quiz(self, quiz: Quiz) -> Quiz:
        return self._insert(self._quizzes, quiz, "create_quiz")

    async def get_quiz(self, quiz_id: UUID) -> Quiz | None:
        return self._copy(self._quizzes.get(quiz_id))

    async def find_latest_quiz(self, document_id: UUID) -> Quiz | None:
        matching = [q for q in self._quizzes.values() if q.document_id == document_id]
        latest = self._recent(matching, "created_at", 1)
        return latest[0] if latest else None

    async def create_quiz_attempt(self, attempt: QuizAttempt) -> QuizAttempt:
        return self._insert(self._attempts, attempt, "create_quiz_attempt")

    async def list_quiz_attempts(self, user_id: str, limit: int | None = None) -> list[QuizAttempt]:
        matching = [a for a in self._attempts.values() if a.user_id == user_id]
        return self._recent(matching, "completed_at", limit)

    async def count_quiz_attempts(self, user_id: str) -> int:
        return sum(1 for a in self._attempts.values() if a.user_id == user_id)

    async def create_conversation(self, conversation: Conversation) -> Conversation:
        return self._insert(self._conversations, conversation, "create_conversation")

    async def get_conversation(self, conversation_id: UUID) -> Conversation | None:
        return self._copy(self._conversations.get(conversation_id))

    async def find_latest_conversation(
        self,
        document_id: UUID,
        user_id: str,
    ) -> Conversation | None:
        matching = [
            c
            for c in self._conversations.values()
            if c.document_id == document_id and c.user_id == user_id
        ]
        latest = self._recent(matching, "created_at", 1)
        return latest[0] if latest else None

    async def list_conversations(self, user_id: str, limit: int | None = None) -> list[Conversation]:
        matching = [c for c in self._conversations.values() if c.user_id == user_id]
        return self._recent(matching, "updated_at", limit)

    async def save_conversation_messages(
        self,
        conversation_id: UUID,
        messages: list[ChatMessage],
        updated_at: datetime,
    ) -> Conversation:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise StorageError(
                f"Conversation not found: {conversation_id}",
                operation="save_conversation_messages",
            )
        updated = conversation.model_copy(
            update={"messages": list(messages), "updated_at": updated_at},
            deep=True,
        )
        self._conversations[conversation_id] = updated
        return updated.model_copy(deep=True)
