"""
Unit tests for LibraryService.

Runs against the in-memory content store with a mocked audio storage.

Dependencies: pytest, pytest-asyncio, unittest.mock
System role: Library service verification
"""

import uuid
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from studycast.application.services import LibraryService
from studycast.boundary.store import InMemoryContentStore
from studycast.core.exceptions import NotFoundError, StorageError
from studycast.models.common import utc_now
from studycast.models.document import Document, Summary
from studycast.models.quiz import QuizAttempt


@pytest.fixture
def library(memory_store: InMemoryContentStore, mock_audio_storage: AsyncMock) -> LibraryService:
    return LibraryService(memory_store, mock_audio_storage, recent_limit=2, results_limit=3)


def make_document(owner_id: str, name: str, offset: int) -> Document:
    return Document(
        owner_id=owner_id,
        title=name,
        source_filename=f"{name}.txt",
        extracted_text=f"{name} text",
        byte_size=10,
        created_at=utc_now() + timedelta(seconds=offset),
    )


def make_attempt(user_id: str, score: int, offset: int) -> QuizAttempt:
    return QuizAttempt(
        quiz_id=uuid.uuid4(),
        user_id=user_id,
        score=score,
        completed_at=utc_now() + timedelta(seconds=offset),
    )


class TestLibraryServiceDashboard:
    """Test dashboard aggregation."""

    @pytest.mark.asyncio
    async def test_dashboard_without_activity(self, library: LibraryService):
        dashboard = await library.dashboard("new-user")

        assert dashboard.documents_count == 0
        assert dashboard.quizzes_count == 0
        assert dashboard.average_score == 0
        assert dashboard.recent_documents == []

    @pytest.mark.asyncio
    async def test_average_rounds_half_up(
        self, library: LibraryService, memory_store: InMemoryContentStore
    ):
        # Arrange: mean of 60, 80 and 75 is 71.67
        for offset, score in enumerate((60, 80, 75)):
            await memory_store.create_quiz_attempt(make_attempt("user-1", score, offset))

        # Act
        dashboard = await library.dashboard("user-1")

        # Assert
        assert dashboard.quizzes_count == 3
        assert dashboard.average_score == 72

    @pytest.mark.asyncio
    async def test_average_uses_recent_results_only(
        self, library: LibraryService, memory_store: InMemoryContentStore
    ):
        # Oldest attempt falls outside results_limit=3
        for offset, score in enumerate((0, 50, 50, 51)):
            await memory_store.create_quiz_attempt(make_attempt("user-1", score, offset))

        dashboard = await library.dashboard("user-1")

        assert dashboard.average_score == 50
        assert [r.score for r in dashboard.recent_results] == [51, 50, 50]
        assert dashboard.quizzes_count == 4

    @pytest.mark.asyncio
    async def test_counts_all_documents_but_lists_recent(
        self, library: LibraryService, memory_store: InMemoryContentStore
    ):
        for offset, name in enumerate(("cells", "atoms", "waves")):
            await memory_store.create_document(make_document("user-1", name, offset))
        await memory_store.create_document(make_document("someone-else", "stars", 9))

        dashboard = await library.dashboard("user-1")

        assert dashboard.documents_count == 3
        assert [d.title for d in dashboard.recent_documents] == ["waves", "atoms"]

    @pytest.mark.asyncio
    async def test_dashboard_fetches_only_recent_rows(
        self, library: LibraryService, memory_store: InMemoryContentStore
    ):
        # Arrange: more rows than either limit
        for offset in range(6):
            await memory_store.create_document(make_document("user-1", f"doc-{offset}", offset))
            await memory_store.create_quiz_attempt(make_attempt("user-1", 90, offset))
        list_documents = AsyncMock(wraps=memory_store.list_documents)
        memory_store.list_documents = list_documents

        # Act
        dashboard = await library.dashboard("user-1")

        # Assert
        list_documents.assert_awaited_once_with("user-1", 2)
        assert dashboard.documents_count == 6
        assert dashboard.quizzes_count == 6
        assert len(dashboard.recent_results) == 3


class TestLibraryServiceSummaries:
    """Test summary listing with playback URLs."""

    @pytest.mark.asyncio
    async def test_summaries_carry_playback_url(
        self,
        library: LibraryService,
        memory_store: InMemoryContentStore,
        stored_document: Document,
    ):
        narrated = await memory_store.create_summary(
            Summary(document_id=stored_document.id, text="Narrated.")
        )
        await memory_store.attach_narration(narrated.id, f"s3://narrations/{narrated.id}.mp3")
        await memory_store.create_summary(
            Summary(
                document_id=stored_document.id,
                text="Silent.",
                created_at=narrated.created_at - timedelta(seconds=1),
            )
        )

        summaries = await library.document_summaries(stored_document.id)

        assert [s.summary.text for s in summaries] == ["Narrated.", "Silent."]
        assert summaries[0].playback_url == f"https://audio.example/{narrated.id}.mp3"
        assert summaries[1].playback_url is None

    @pytest.mark.asyncio
    async def test_unsignable_ref_yields_no_url(
        self, memory_store: InMemoryContentStore, stored_document: Document
    ):
        audio_storage = MagicMock()
        audio_storage.playback_url.side_effect = StorageError("bad ref", operation="playback_url")
        library = LibraryService(memory_store, audio_storage)
        summary = await memory_store.create_summary(
            Summary(document_id=stored_document.id, text="Narrated.")
        )
        await memory_store.attach_narration(summary.id, "not-a-ref")

        [entry] = await library.document_summaries(stored_document.id)

        assert entry.playback_url is None

    @pytest.mark.asyncio
    async def test_missing_document_raises(self, library: LibraryService):
        with pytest.raises(NotFoundError):
            await library.document_summaries(uuid.uuid4())


class TestLibraryServiceDocuments:
    """Test document lookups."""

    @pytest.mark.asyncio
    async def test_recent_documents_default_limit(
        self, library: LibraryService, memory_store: InMemoryContentStore
    ):
        for offset, name in enumerate(("a", "b", "c")):
            await memory_store.create_document(make_document("user-1", name, offset))

        documents = await library.recent_documents("user-1")

        assert [d.title for d in documents] == ["c", "b"]

    @pytest.mark.asyncio
    async def test_get_document_missing_raises(self, library: LibraryService):
        with pytest.raises(NotFoundError) as exc_info:
            await library.get_document(uuid.uuid4())

        assert exc_info.value.entity == "document"
