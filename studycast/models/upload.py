"""
Upload task models and schemas.

UploadTask is ephemeral progress state for one file's journey through the
ingestion pipeline. It is never persisted.

Dependencies: pydantic
System role: Ingestion progress contracts
"""

import enum
import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from studycast.core.exceptions import ErrorKind
from studycast.models.common import utc_now


class TaskStatus(str, enum.Enum):
    """
    Pipeline stages in execution order.

    QUEUED: Accepted, waiting for the event loop to start it
    EXTRACTING: Source file being converted to text (25%)
    PERSISTING: Document row being written (50%)
    SUMMARIZING: Language model summarizing (75%)
    NARRATING: Summary being synthesized to audio
    COMPLETED: Every stage succeeded (100%)
    FAILED: A stage failed; see error_kind
    """

    QUEUED = "queued"
    EXTRACTING = "extracting"
    PERSISTING = "persisting"
    SUMMARIZING = "summarizing"
    NARRATING = "narrating"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.COMPLETED, TaskStatus.FAILED)


class SourceFile(BaseModel):
    """Raw uploaded file handed to the ingestion coordinator."""

    filename: str = Field(min_length=1)
    content: bytes = Field(repr=False)
    content_type: str | None = None

    @property
    def byte_size(self) -> int:
        return len(self.content)


class UploadTask(BaseModel):
    """Progress of one source file through the pipeline."""

    task_id: uuid.UUID = Field(default_factory=uuid.uuid4)
    source_filename: str
    byte_size: int
    status: TaskStatus = TaskStatus.QUEUED
    progress_percent: int = Field(default=0, ge=0, le=100)
    document_id: uuid.UUID | None = None
    summary_id: uuid.UUID | None = None
    narration_ref: str | None = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class SubmitUploadsResponse(BaseModel):
    """Response schema for a submitted batch."""

    task_ids: list[uuid.UUID]


class UploadTaskListResponse(BaseModel):
    """All tasks known to the coordinator, in submission order."""

    tasks: list[UploadTask]
    total: int
