"""
Content store interface.

Durable keyed storage for documents, summaries, quizzes, quiz attempts and
conversations. Implementations return copies of domain models, so callers
never share mutable state through the store. Lookups return None for missing
rows; backend failures raise StorageError.

Dependencies: studycast.models
System role: Persistence port used by the pipeline, quiz and conversation engines
"""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from studycast.models.conversation import ChatMessage, Conversation
from studycast.models.document import Document, Summary
from studycast.models.quiz import Quiz, QuizAttempt


class ContentStore(ABC):
    """Keyed create/read/update plus recency queries per owner."""

    # Documents

    @abstractmethod
    async def create_document(self, document: Document) -> Document:
        """Insert a document. Documents are never updated afterwards."""

    @abstractmethod
    async def get_document(self, document_id: UUID) -> Document | None:
        """Fetch a document by id."""

    @abstractmethod
    async def list_documents(self, owner_id: str, limit: int | None = None) -> list[Document]:
        """An owner's documents, newest first."""

    @abstractmethod
    async def count_documents(self, owner_id: str) -> int:
        """Number of documents an owner has."""

    # Summaries

    @abstractmethod
    async def create_summary(self, summary: Summary) -> Summary:
        """Insert a summary."""

    @abstractmethod
    async def attach_narration(self, summary_id: UUID, narration_ref: str) -> Summary:
        """
        Set narration_ref on an existing summary.

        Raises:
            StorageError: If the summary does not exist or the write fails
        """

    @abstractmethod
    async def list_summaries(self, document_id: UUID) -> list[Summary]:
        """All summaries of a document, newest first."""

    # Quizzes

    @abstractmethod
    async def create_quiz(self, quiz: Quiz) -> Quiz:
        """Insert a quiz."""

    @abstractmethod
    async def get_quiz(self, quiz_id: UUID) -> Quiz | None:
        """Fetch a quiz by id."""

    @abstractmethod
    async def find_latest_quiz(self, document_id: UUID) -> Quiz | None:
        """Newest quiz generated for a document."""

    @abstractmethod
    async def create_quiz_attempt(self, attempt: QuizAttempt) -> QuizAttempt:
        """Insert a completed quiz attempt."""

    @abstractmethod
    async def list_quiz_attempts(self, user_id: str, limit: int | None = None) -> list[QuizAttempt]:
        """A user's attempts, most recently completed first."""

    @abstractmethod
    async def count_quiz_attempts(self, user_id: str) -> int:
        """Number of attempts a user has completed."""

    # Conversations

    @abstractmethod
    async def create_conversation(self, conversation: Conversation) -> Conversation:
        """Insert a conversation."""

    @abstractmethod
    async def get_conversation(self, conversation_id: UUID) -> Conversation | None:
        """Fetch a conversation by id."""

    @abstractmethod
    async def find_latest_conversation(
        self,
        document_id: UUID,
        user_id: str,
    ) -> Conversation | None:
        """Newest conversation for a (document, user) pair."""

    @abstractmethod
    async def list_conversations(self, user_id: str, limit: int | None = None) -> list[Conversation]:
        """A user's conversations, most recently updated first."""

    @abstractmethod
    async def save_conversation_messages(
        self,
        conversation_id: UUID,
        messages: list[ChatMessage],
        updated_at: datetime,
    ) -> Conversation:
        """
        Replace the stored message list and bump updated_at in one write.

        Raises:
            StorageError: If the conversation does not exist or the write fails
        """

    # Lifecycle

    async def close(self) -> None:
        """Release backend resources. The store is unusable afterwards."""
