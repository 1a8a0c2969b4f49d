"""
Ingestion coordinator.

Validates an upload batch, creates one UploadTask per file and starts an
independent asyncio task per file running the stage executor. Tasks share
nothing but the content store; one failing never affects another.

Dependencies: asyncio, studycast.core.ingestion.stage_executor
System role: Upload batch orchestration and progress reporting
"""

import asyncio
import logging
from collections.abc import Iterable, Sequence
from uuid import UUID

from studycast.core.exceptions import (
    IngestionValidationError,
    TaskStillRunningError,
    UnknownTaskError,
)
from studycast.core.ingestion.stage_executor import PipelineStageExecutor
from studycast.models.upload import SourceFile, UploadTask

logger = logging.getLogger(__name__)

DEFAULT_MAX_BATCH_SIZE = 5
DEFAULT_MAX_FILE_BYTES = 10 * 1024 * 1024
DEFAULT_MAX_RETAINED_TASKS = 200


class IngestionCoordinator:
    """
    Owns the UploadTasks of one application instance.

    Tasks live only as long as the coordinator; nothing here is persisted.
    Finished tasks are kept for polling until forget() is called or more than
    max_retained_tasks tasks exist, at which point the oldest finished ones
    are dropped. Running tasks are never dropped.
    """

    def __init__(
        self,
        executor: PipelineStageExecutor,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
        max_file_bytes: int = DEFAULT_MAX_FILE_BYTES,
        max_retained_tasks: int = DEFAULT_MAX_RETAINED_TASKS,
    ) -> None:
        """
        Initialize coordinator.

        Args:
            executor: Stage executor shared by every pipeline
            max_batch_size: Maximum files accepted per submit()
            max_file_bytes: Maximum size of a single file
            max_retained_tasks: Task count above which finished tasks are pruned
        """
        self.executor = executor
        self.max_batch_size = max_batch_size
        self.max_file_bytes = max_file_bytes
        self.max_retained_tasks = max_retained_tasks
        self._tasks: dict[UUID, UploadTask] = {}
        self._runners: dict[UUID, asyncio.Task] = {}

    def submit(self, files: Sequence[SourceFile], owner_id: str) -> list[UUID]:
        """
        Validate a batch and start one pipeline per file.

        Must be called from a running event loop.

        Args:
            files: Uploaded files
            owner_id: Owner of the resulting documents

        Returns:
            list[UUID]: Task handles in the order of files

        Raises:
            IngestionValidationError: If the batch is rejected; nothing is started
        """
        self._validate(files, owner_id)

        handles = []
        for source in files:
            task = UploadTask(source_filename=source.filename, byte_size=source.byte_size)
            self._tasks[task.task_id] = task
            self._runners[task.task_id] = asyncio.create_task(
                self.executor.run(task, source, owner_id),
                name=f"ingest-{task.task_id}",
            )
            handles.append(task.task_id)
        self._prune()

        logger.info(
            f"{__name__}:submit - Batch accepted",
            extra={"owner_id": owner_id, "file_count": len(files)},
        )
        return handles

    def status(self, task_id: UUID) -> UploadTask:
        """
        Snapshot of a task's progress.

        Raises:
            UnknownTaskError: If the handle was not issued by this coordinator
        """
        task = self._tasks.get(task_id)
        if task is None:
            raise UnknownTaskError(task_id)
        return task.model_copy(deep=True)

    def list_tasks(self) -> list[UploadTask]:
        """Snapshots of every task in submission order."""
        return [task.model_copy(deep=True) for task in self._tasks.values()]

    def forget(self, task_id: UUID) -> None:
        """
        Discard a finished task so its handle is no longer tracked.

        Raises:
            UnknownTaskError: If the handle is unknown
            TaskStillRunningError: If the pipeline has not finished
        """
        if task_id not in self._tasks:
            raise UnknownTaskError(task_id)
        if not self._runners[task_id].done():
            raise TaskStillRunningError(task_id)
        del self._tasks[task_id]
        del self._runners[task_id]

    async def wait(self, task_ids: Iterable[UUID] | None = None) -> list[UploadTask]:
        """
        Wait until the given pipelines (default: all) reach a terminal state.

        Returns:
            list[UploadTask]: Snapshots of the awaited tasks

        Raises:
            UnknownTaskError: If any handle is unknown
        """
        ids = list(self._tasks) if task_ids is None else list(task_ids)
        for task_id in ids:
            if task_id not in self._tasks:
                raise UnknownTaskError(task_id)

        runners = [self._runners[task_id] for task_id in ids if not self._runners[task_id].done()]
        if runners:
            await asyncio.wait(runners)
        return [self.status(task_id) for task_id in ids]

    async def shutdown(self) -> None:
        """Cancel pipelines that are still running. No compensation is attempted."""
        pending = [runner for runner in self._runners.values() if not runner.done()]
        for runner in pending:
            runner.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info(f"{__name__}:shutdown - Cancelled {len(pending)} running pipeline(s)")

    def check_file_size(self, filename: str, byte_size: int) -> None:
        """
        Reject an empty or oversized file.

        Raises:
            IngestionValidationError: If byte_size is 0 or above max_file_bytes
        """
        if byte_size == 0:
            raise IngestionValidationError(
                f"File is empty: {filename}",
                field="files",
                details={"filename": filename},
            )
        if byte_size > self.max_file_bytes:
            raise IngestionValidationError(
                f"File too large: {filename} ({byte_size} bytes)",
                field="files",
                details={
                    "filename": filename,
                    "byte_size": byte_size,
                    "max_file_bytes": self.max_file_bytes,
                },
            )

    def _prune(self) -> None:
        excess = len(self._tasks) - self.max_retained_tasks
        if excess <= 0:
            return
        finished = [task_id for task_id, runner in self._runners.items() if runner.done()]
        dropped = finished[:excess]
        for task_id in dropped:
            del self._tasks[task_id]
            del self._runners[task_id]
        if dropped:
            logger.debug(f"{__name__}:_prune - Dropped {len(dropped)} finished task(s)")

    def _validate(self, files: Sequence[SourceFile], owner_id: str) -> None:
        if not owner_id or not owner_id.strip():
            raise IngestionValidationError("owner_id is required", field="owner_id")
        if not files:
            raise IngestionValidationError("No files submitted", field="files")
        if len(files) > self.max_batch_size:
            raise IngestionValidationError(
                f"Too many files: {len(files)} (max {self.max_batch_size})",
                field="files",
                details={"file_count": len(files), "max_batch_size": self.max_batch_size},
            )
        for source in files:
            self.check_file_size(source.filename, source.byte_size)
