"""
Pipeline stage executor.

Drives one UploadTask through extraction, document persistence,
summarization and narration. Stages run in a fixed order and none is retried.
Any failure is recorded on the task and the run ends; run() never raises.

Progress on stage entry: extracting 25, persisting 50, summarizing 75.
Narrating keeps 75 and completion sets 100. A failed task keeps the progress
it had when the failing stage started.

Dependencies: studycast.boundary, studycast.core.exceptions, studycast.models
System role: Per-file ingestion pipeline
"""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from studycast.boundary.extraction import TextExtractor
from studycast.boundary.llm import LanguageModelService
from studycast.boundary.speech import AudioStorage, SpeechSynthesizer
from studycast.boundary.store import ContentStore
from studycast.core.exceptions import ErrorKind, ExtractionError, StudycastError
from studycast.models.common import utc_now
from studycast.models.document import Document, Summary
from studycast.models.upload import SourceFile, TaskStatus, UploadTask
from studycast.observability.correlation import set_correlation_id
from studycast.observability.log_utils import (
    error_context,
    log_exception_with_context,
    log_with_context,
)

logger = logging.getLogger(__name__)

STAGE_PROGRESS: dict[TaskStatus, int] = {
    TaskStatus.EXTRACTING: 25,
    TaskStatus.PERSISTING: 50,
    TaskStatus.SUMMARIZING: 75,
    TaskStatus.NARRATING: 75,
    TaskStatus.COMPLETED: 100,
}

STAGE_ERROR_KIND: dict[TaskStatus, ErrorKind] = {
    TaskStatus.EXTRACTING: ErrorKind.EXTRACTION_FAILED,
    TaskStatus.PERSISTING: ErrorKind.STORAGE_FAILED,
    TaskStatus.SUMMARIZING: ErrorKind.SUMMARIZATION_FAILED,
    TaskStatus.NARRATING: ErrorKind.NARRATION_FAILED,
}


class _StageFailed(Exception):
    """Internal signal carrying the error kind of the failed stage."""

    def __init__(self, kind: ErrorKind, cause: BaseException) -> None:
        self.kind = kind
        self.cause = cause
        super().__init__(str(cause))


def document_title(filename: str) -> str:
    """Display title for a document: the filename without its extension."""
    stem, _ = os.path.splitext(os.path.basename(filename))
    return stem or filename


class PipelineStageExecutor:
    """
    Runs the ingestion stages for a single source file.

    The executor holds only collaborators, never per-task state, so one
    instance is shared by every concurrently running pipeline.
    """

    def __init__(
        self,
        extractor: TextExtractor,
        store: ContentStore,
        language_model: LanguageModelService,
        synthesizer: SpeechSynthesizer,
        audio_storage: AudioStorage,
    ) -> None:
        """
        Initialize stage executor.

        Args:
            extractor: Source file to plain text
            store: Content store for documents and summaries
            language_model: Summarization backend
            synthesizer: Speech synthesis backend
            audio_storage: Destination for narration audio
        """
        self.extractor = extractor
        self.store = store
        self.language_model = language_model
        self.synthesizer = synthesizer
        self.audio_storage = audio_storage

    async def run(self, task: UploadTask, source: SourceFile, owner_id: str) -> UploadTask:
        """
        Execute every stage for one task, mutating it in place.

        Args:
            task: Task created by the coordinator, in QUEUED state
            source: Uploaded file
            owner_id: Owner of the resulting document

        Returns:
            UploadTask: The same task, now COMPLETED or FAILED
        """
        set_correlation_id(str(task.task_id))
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:run - Pipeline started",
            task_id=task.task_id,
            source_filename=source.filename,
            byte_size=source.byte_size,
        )

        try:
            text = await self._extract(task, source)
            document = await self._persist_document(task, source, owner_id, text)
            summary_text = await self._summarize(task, document.extracted_text)
            summary = await self._persist_summary(task, document.id, summary_text)
            await self._narrate(task, summary)
        except _StageFailed as failure:
            self._fail(task, failure.kind, failure.cause)
            return task

        self._advance(task, TaskStatus.COMPLETED)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:run - Pipeline completed",
            task_id=task.task_id,
            document_id=task.document_id,
            summary_id=task.summary_id,
        )
        return task

    # Stages

    async def _extract(self, task: UploadTask, source: SourceFile) -> str:
        self._advance(task, TaskStatus.EXTRACTING)
        async with self._stage(TaskStatus.EXTRACTING):
            text = await self.extractor.extract(source.filename, source.content)
            if not text or not text.strip():
                raise ExtractionError("No text could be extracted", filename=source.filename)
        return text

    async def _persist_document(
        self,
        task: UploadTask,
        source: SourceFile,
        owner_id: str,
        text: str,
    ) -> Document:
        self._advance(task, TaskStatus.PERSISTING)
        async with self._stage(TaskStatus.PERSISTING):
            document = await self.store.create_document(
                Document(
                    owner_id=owner_id,
                    title=document_title(source.filename),
                    source_filename=source.filename,
                    extracted_text=text,
                    byte_size=source.byte_size,
                )
            )
        task.document_id = document.id
        return document

    async def _summarize(self, task: UploadTask, text: str) -> str:
        self._advance(task, TaskStatus.SUMMARIZING)
        async with self._stage(TaskStatus.SUMMARIZING):
            return await self.language_model.summarize(text)

    async def _persist_summary(self, task: UploadTask, document_id: UUID, text: str) -> Summary:
        # Still part of summarizing; a write failure here is a storage failure
        async with self._stage(TaskStatus.PERSISTING):
            summary = await self.store.create_summary(Summary(document_id=document_id, text=text))
        task.summary_id = summary.id
        return summary

    async def _narrate(self, task: UploadTask, summary: Summary) -> None:
        self._advance(task, TaskStatus.NARRATING)
        async with self._stage(TaskStatus.NARRATING):
            audio = await self.synthesizer.synthesize(summary.text)
            ref = await self.audio_storage.save(
                summary.id,
                audio,
                self.synthesizer.content_type,
            )
            await self.store.attach_narration(summary.id, ref)
        task.narration_ref = ref

    # Helpers

    @staticmethod
    @asynccontextmanager
    async def _stage(stage: TaskStatus) -> AsyncIterator[None]:
        """Convert any exception raised inside a stage into _StageFailed."""
        try:
            yield
        except Exception as e:
            raise _StageFailed(STAGE_ERROR_KIND[stage], e) from e

    def _advance(self, task: UploadTask, status: TaskStatus) -> None:
        task.status = status
        task.progress_percent = STAGE_PROGRESS[status]
        task.updated_at = utc_now()
        logger.info(
            f"{__name__}:_advance - {status.value}",
            extra={"task_id": str(task.task_id), "progress": task.progress_percent},
        )

    def _fail(self, task: UploadTask, kind: ErrorKind, cause: BaseException) -> None:
        task.status = TaskStatus.FAILED
        task.error_kind = kind
        task.error_message = cause.message if isinstance(cause, StudycastError) else str(cause)
        task.updated_at = utc_now()

        if isinstance(cause, StudycastError):
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:run - Pipeline failed: {kind.value}",
                task_id=task.task_id,
                **error_context(cause),
            )
        else:
            log_exception_with_context(
                logger,
                f"{__name__}:run - Pipeline failed unexpectedly: {kind.value}",
                cause,
                task_id=task.task_id,
            )

