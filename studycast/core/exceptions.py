"""
Exception hierarchy for the studycast application.

Provides layered exception structure for domain-specific errors.
Every exception carries an ErrorKind so callers (pipeline tasks, API routers)
can report a typed failure without inspecting class names.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

import enum
from typing import Any


class ErrorKind(str, enum.Enum):
    """
    Failure taxonomy reported to callers.

    Pipeline kinds map one-to-one to ingestion stages. NOT_FOUND and
    INVALID_STATE cover lookups and state machine misuse.
    """

    VALIDATION_FAILED = "validation_failed"
    EXTRACTION_FAILED = "extraction_failed"
    STORAGE_FAILED = "storage_failed"
    SUMMARIZATION_FAILED = "summarization_failed"
    NARRATION_FAILED = "narration_failed"
    QUIZ_GENERATION_FAILED = "quiz_generation_failed"
    CONVERSATION_FAILED = "conversation_failed"
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"


class StudycastError(Exception):
    """Base exception for all studycast application errors."""

    kind: ErrorKind = ErrorKind.INVALID_STATE

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(StudycastError):
    """Raised when input validation fails."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class IngestionValidationError(ValidationError):
    """Raised when an upload batch is rejected before any stage runs."""


class NotFoundError(StudycastError):
    """Raised when an entity cannot be found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        entity: str,
        entity_id: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            entity: Entity type name (document, quiz, task, ...)
            entity_id: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        details[f"{entity}_id"] = str(entity_id)
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found: {entity_id}", details)


class ExtractionError(StudycastError):
    """Raised when a source file cannot be turned into text."""

    kind = ErrorKind.EXTRACTION_FAILED

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            filename: Source filename that failed extraction
            details: Additional context
        """
        details = details or {}
        if filename:
            details["filename"] = filename
        super().__init__(message, details)


class StorageError(StudycastError):
    """Raised when a content store or audio storage operation fails."""

    kind = ErrorKind.STORAGE_FAILED

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Operation that failed (create_document, update_summary, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class SummarizationError(StudycastError):
    """Raised when the language model fails to summarize a document."""

    kind = ErrorKind.SUMMARIZATION_FAILED


class NarrationError(StudycastError):
    """Raised when speech synthesis or narration storage fails."""

    kind = ErrorKind.NARRATION_FAILED


class QuizGenerationError(StudycastError):
    """Raised when the language model returns no usable quiz."""

    kind = ErrorKind.QUIZ_GENERATION_FAILED

    def __init__(
        self,
        message: str,
        document_id: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize quiz generation error.

        Args:
            message: Error message
            document_id: Document the quiz was requested for
            details: Additional context
        """
        details = details or {}
        if document_id is not None:
            details["document_id"] = str(document_id)
        super().__init__(message, details)


class QuizSessionError(StudycastError):
    """Raised when a quiz session operation is not allowed in its current state."""

    kind = ErrorKind.INVALID_STATE


class ConversationError(StudycastError):
    """Raised when a conversation turn cannot be completed."""

    kind = ErrorKind.CONVERSATION_FAILED

    def __init__(
        self,
        message: str,
        conversation_id: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize conversation error.

        Args:
            message: Error message
            conversation_id: Conversation the turn belonged to
            details: Additional context
        """
        details = details or {}
        if conversation_id is not None:
            details["conversation_id"] = str(conversation_id)
        super().__init__(message, details)


class ConversationBusyError(StudycastError):
    """Raised when a second message is sent while a turn is still in flight."""

    kind = ErrorKind.INVALID_STATE


class UnknownTaskError(NotFoundError):
    """Raised when a task handle was never issued by the coordinator."""

    def __init__(self, task_id: Any) -> None:
        super().__init__("task", task_id)


class ConversationNotFoundError(NotFoundError):
    """Raised when a conversation id is unknown."""

    def __init__(self, conversation_id: Any) -> None:
        super().__init__("conversation", conversation_id)


class ConversationValidationError(ValidationError):
    """Raised when a chat message is blank."""


class TaskStillRunningError(StudycastError):
    """Raised when a task is discarded before its pipeline has finished."""

    kind = ErrorKind.INVALID_STATE

    def __init__(self, task_id: Any) -> None:
        super().__init__("Task is still running", details={"task_id": str(task_id)})
