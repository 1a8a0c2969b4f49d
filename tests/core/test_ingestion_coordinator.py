"""
Test suite for IngestionCoordinator.

Tests batch validation, one independent pipeline per file, status snapshots
and shutdown of running pipelines.

System role: Verification of upload batch orchestration
"""

import asyncio
import uuid
from unittest.mock import AsyncMock

import pytest

from studycast.boundary.store import InMemoryContentStore
from studycast.core.exceptions import (
    ErrorKind,
    ExtractionError,
    IngestionValidationError,
    TaskStillRunningError,
    UnknownTaskError,
)
from studycast.core.ingestion import IngestionCoordinator, PipelineStageExecutor
from studycast.models.upload import SourceFile, TaskStatus


@pytest.fixture
def coordinator(
    mock_extractor: AsyncMock,
    memory_store: InMemoryContentStore,
    mock_language_model: AsyncMock,
    mock_synthesizer: AsyncMock,
    mock_audio_storage: AsyncMock,
) -> IngestionCoordinator:
    """Provide coordinator with a 5 file / 1 KB limit."""
    executor = PipelineStageExecutor(
        mock_extractor,
        memory_store,
        mock_language_model,
        mock_synthesizer,
        mock_audio_storage,
    )
    return IngestionCoordinator(executor, max_batch_size=5, max_file_bytes=1024)


def make_files(count: int, size: int = 100) -> list[SourceFile]:
    return [SourceFile(filename=f"file-{index}.txt", content=b"x" * size) for index in range(count)]


class TestCoordinatorSubmit:
    """Test suite for IngestionCoordinator.submit()."""

    @pytest.mark.asyncio
    async def test_submit_should_create_one_task_per_file(
        self, coordinator: IngestionCoordinator
    ) -> None:
        """Test every file gets its own task handle, in order."""
        # Act
        handles = coordinator.submit(make_files(3), "user-1")
        tasks = await coordinator.wait(handles)

        # Assert
        assert len(handles) == 3
        assert len(set(handles)) == 3
        assert [task.source_filename for task in tasks] == ["file-0.txt", "file-1.txt", "file-2.txt"]
        assert all(task.status.is_terminal for task in tasks)

    @pytest.mark.asyncio
    async def test_failure_in_one_pipeline_should_not_affect_others(
        self,
        coordinator: IngestionCoordinator,
        mock_extractor: AsyncMock,
        memory_store: InMemoryContentStore,
    ) -> None:
        """Test a failing file does not stop its siblings."""
        # Arrange
        async def extract(filename, content):
            if filename == "file-1.txt":
                raise ExtractionError("unreadable", filename)
            return "Some readable study text."

        mock_extractor.extract.side_effect = extract

        # Act
        handles = coordinator.submit(make_files(3), "user-1")
        await coordinator.wait()

        # Assert
        statuses = [coordinator.status(handle) for handle in handles]
        assert [task.status for task in statuses] == [
            TaskStatus.COMPLETED,
            TaskStatus.FAILED,
            TaskStatus.COMPLETED,
        ]
        assert statuses[1].error_kind == ErrorKind.EXTRACTION_FAILED
        assert len(await memory_store.list_documents("user-1")) == 2

    @pytest.mark.asyncio
    async def test_submit_should_start_pipelines_concurrently(
        self,
        coordinator: IngestionCoordinator,
        mock_extractor: AsyncMock,
    ) -> None:
        """Test all pipelines are in flight before any finishes."""
        # Arrange
        release = asyncio.Event()
        started = []

        async def extract(filename, content):
            started.append(filename)
            await release.wait()
            return "text"

        mock_extractor.extract.side_effect = extract

        # Act
        coordinator.submit(make_files(3), "user-1")
        for _ in range(5):
            await asyncio.sleep(0)

        # Assert
        assert sorted(started) == ["file-0.txt", "file-1.txt", "file-2.txt"]
        assert all(task.status == TaskStatus.EXTRACTING for task in coordinator.list_tasks())

        release.set()
        await coordinator.wait()


class TestCoordinatorValidation:
    """Test suite for batch validation."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "files",
        [
            [],
            make_files(6),
            make_files(1, size=2048),
            [SourceFile(filename="empty.txt", content=b"")],
        ],
        ids=["empty-batch", "too-many-files", "file-too-large", "empty-file"],
    )
    async def test_invalid_batch_should_schedule_nothing(
        self, coordinator: IngestionCoordinator, files: list[SourceFile]
    ) -> None:
        """Test rejected batches raise before any task exists."""
        # Act / Assert
        with pytest.raises(IngestionValidationError) as exc_info:
            coordinator.submit(files, "user-1")

        assert exc_info.value.kind == ErrorKind.VALIDATION_FAILED
        assert coordinator.list_tasks() == []

    @pytest.mark.asyncio
    async def test_batch_at_limit_should_be_accepted(
        self, coordinator: IngestionCoordinator
    ) -> None:
        """Test exactly max_batch_size files of max_file_bytes are allowed."""
        # Act
        handles = coordinator.submit(make_files(5, size=1024), "user-1")
        await coordinator.wait()

        # Assert
        assert len(handles) == 5

    @pytest.mark.asyncio
    async def test_blank_owner_should_be_rejected(self, coordinator: IngestionCoordinator) -> None:
        """Test owner_id is required."""
        with pytest.raises(IngestionValidationError):
            coordinator.submit(make_files(1), "  ")


class TestCoordinatorStatus:
    """Test suite for status(), list_tasks() and wait()."""

    @pytest.mark.asyncio
    async def test_status_should_return_snapshot_copy(
        self, coordinator: IngestionCoordinator
    ) -> None:
        """Test callers cannot mutate coordinator-owned tasks."""
        # Arrange
        [handle] = coordinator.submit(make_files(1), "user-1")
        await coordinator.wait()

        # Act
        snapshot = coordinator.status(handle)
        snapshot.progress_percent = 0

        # Assert
        assert coordinator.status(handle).progress_percent == 100

    @pytest.mark.asyncio
    async def test_status_should_reject_unknown_handle(
        self, coordinator: IngestionCoordinator
    ) -> None:
        """Test unknown handles raise UnknownTaskError."""
        with pytest.raises(UnknownTaskError) as exc_info:
            coordinator.status(uuid.uuid4())

        assert exc_info.value.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_wait_should_reject_unknown_handle(
        self, coordinator: IngestionCoordinator
    ) -> None:
        """Test wait() validates handles before waiting."""
        with pytest.raises(UnknownTaskError):
            await coordinator.wait([uuid.uuid4()])

    @pytest.mark.asyncio
    async def test_list_tasks_should_keep_submission_order(
        self, coordinator: IngestionCoordinator
    ) -> None:
        """Test tasks from several batches are listed in submission order."""
        # Arrange
        first = coordinator.submit(make_files(2), "user-1")
        second = coordinator.submit(make_files(1), "user-2")
        await coordinator.wait()

        # Act
        tasks = coordinator.list_tasks()

        # Assert
        assert [task.task_id for task in tasks] == first + second


class TestCoordinatorRetention:
    """Test suite for forget() and pruning of finished tasks."""

    @pytest.mark.asyncio
    async def test_forget_should_drop_finished_task(self, coordinator: IngestionCoordinator) -> None:
        # Arrange
        [handle] = coordinator.submit(make_files(1), "user-1")
        await coordinator.wait()

        # Act
        coordinator.forget(handle)

        # Assert
        assert coordinator.list_tasks() == []
        with pytest.raises(UnknownTaskError):
            coordinator.status(handle)

    @pytest.mark.asyncio
    async def test_forget_should_refuse_running_task(
        self, coordinator: IngestionCoordinator, mock_extractor: AsyncMock
    ) -> None:
        # Arrange
        release = asyncio.Event()

        async def extract(filename, content):
            await release.wait()
            return "text"

        mock_extractor.extract.side_effect = extract
        [handle] = coordinator.submit(make_files(1), "user-1")

        # Act / Assert
        with pytest.raises(TaskStillRunningError):
            coordinator.forget(handle)
        release.set()
        await coordinator.wait()
        assert coordinator.status(handle).status == TaskStatus.COMPLETED

    def test_forget_should_reject_unknown_handle(self, coordinator: IngestionCoordinator) -> None:
        with pytest.raises(UnknownTaskError):
            coordinator.forget(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_finished_tasks_should_be_pruned_past_retention(
        self, coordinator: IngestionCoordinator
    ) -> None:
        # Arrange
        retaining = IngestionCoordinator(coordinator.executor, max_retained_tasks=3)
        handles = []

        # Act
        for _ in range(10):
            handles.extend(retaining.submit(make_files(1), "user-1"))
            await retaining.wait()

        # Assert: oldest finished tasks dropped
        assert [task.task_id for task in retaining.list_tasks()] == handles[-3:]
        with pytest.raises(UnknownTaskError):
            retaining.status(handles[0])

    @pytest.mark.asyncio
    async def test_running_tasks_should_never_be_pruned(
        self, coordinator: IngestionCoordinator, mock_extractor: AsyncMock
    ) -> None:
        # Arrange
        release = asyncio.Event()

        async def extract(filename, content):
            await release.wait()
            return "text"

        mock_extractor.extract.side_effect = extract
        retaining = IngestionCoordinator(coordinator.executor, max_retained_tasks=2)

        # Act
        handles = retaining.submit(make_files(5), "user-1")

        # Assert
        assert [task.task_id for task in retaining.list_tasks()] == handles
        release.set()
        await retaining.wait()


class TestCoordinatorShutdown:
    """Test suite for IngestionCoordinator.shutdown()."""

    @pytest.mark.asyncio
    async def test_shutdown_should_cancel_running_pipelines(
        self,
        coordinator: IngestionCoordinator,
        mock_extractor: AsyncMock,
    ) -> None:
        """Test pending pipelines are cancelled and left non-terminal."""
        # Arrange
        never = asyncio.Event()

        async def extract(filename, content):
            await never.wait()

        mock_extractor.extract.side_effect = extract
        [handle] = coordinator.submit(make_files(1), "user-1")
        await asyncio.sleep(0)

        # Act
        await coordinator.shutdown()

        # Assert
        task = coordinator.status(handle)
        assert task.status == TaskStatus.EXTRACTING
        assert not task.status.is_terminal
