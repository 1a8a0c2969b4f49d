"""
Library service.

Read-side queries behind the document library and dashboard: recent
documents, summaries with narration URLs and quiz result statistics.

Dependencies: studycast.boundary.store, studycast.boundary.speech
System role: Library and dashboard query orchestration
"""

import logging
from uuid import UUID

from studycast.boundary.speech import AudioStorage
from studycast.boundary.store import ContentStore
from studycast.core.exceptions import NotFoundError, StorageError
from studycast.models.document import Document, DocumentResponse
from studycast.models.library import DashboardResponse, SummaryResponse

logger = logging.getLogger(__name__)


class LibraryService:
    """
    Library query orchestrator.

    Wraps ContentStore reads for the dashboard and document pages.
    """

    def __init__(
        self,
        store: ContentStore,
        audio_storage: AudioStorage | None = None,
        recent_limit: int = 5,
        results_limit: int = 10,
    ) -> None:
        """
        Initialize library service.

        Args:
            store: Content store
            audio_storage: Resolves narration refs to playback URLs
            recent_limit: Documents shown as "recent"
            results_limit: Quiz attempts used for recent results and the average
        """
        self.store = store
        self.audio_storage = audio_storage
        self.recent_limit = recent_limit
        self.results_limit = results_limit

    async def recent_documents(self, owner_id: str, limit: int | None = None) -> list[Document]:
        """An owner's newest documents."""
        return await self.store.list_documents(owner_id, limit or self.recent_limit)

    async def get_document(self, document_id: UUID) -> Document:
        """
        Fetch a document.

        Raises:
            NotFoundError: If the document does not exist
        """
        document = await self.store.get_document(document_id)
        if document is None:
            raise NotFoundError("document", document_id)
        return document

    async def document_summaries(self, document_id: UUID) -> list[SummaryResponse]:
        """
        Summaries of a document, newest first, with playback URLs.

        Raises:
            NotFoundError: If the document does not exist
        """
        await self.get_document(document_id)
        summaries = await self.store.list_summaries(document_id)
        return [
            SummaryResponse(summary=summary, playback_url=self._playback_url(summary.narration_ref))
            for summary in summaries
        ]

    async def dashboard(self, user_id: str) -> DashboardResponse:
        """
        Dashboard overview for a user.

        documents_count and quizzes_count are totals. average_score is the
        rounded mean of the recent results, 0 when there are none.
        """
        documents_count = await self.store.count_documents(user_id)
        quizzes_count = await self.store.count_quiz_attempts(user_id)
        documents = await self.store.list_documents(user_id, self.recent_limit)
        results = await self.store.list_quiz_attempts(user_id, self.results_limit)

        average = 0
        if results:
            total = sum(result.score for result in results)
            average = (2 * total + len(results)) // (2 * len(results))

        return DashboardResponse(
            user_id=user_id,
            documents_count=documents_count,
            quizzes_count=quizzes_count,
            average_score=average,
            recent_documents=[DocumentResponse.from_document(document) for document in documents],
            recent_results=results,
        )

    def _playback_url(self, narration_ref: str | None) -> str | None:
        if not narration_ref or self.audio_storage is None:
            return None
        try:
            return self.audio_storage.playback_url(narration_ref)
        except StorageError as e:
            logger.warning(f"{__name__}:_playback_url - Unresolvable narration ref: {e}")
            return None
