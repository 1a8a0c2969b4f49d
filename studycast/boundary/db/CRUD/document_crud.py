"""
Document and summary CRUD operations.

Dependencies: sqlalchemy, studycast.boundary.db.models
System role: Document and summary persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studycast.boundary.db.CRUD.base_crud import BaseCRUD
from studycast.boundary.db.models.document_model import DocumentModel
from studycast.boundary.db.models.summary_model import SummaryModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel (insert and read only)."""

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_recent_by_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve an owner's documents, newest first.

        Args:
            session: Async database session
            owner_id: Owning user identifier
            limit: Maximum number of documents to return

        Returns:
            Sequence of DocumentModels
        """
        return await self.get_recent(
            session,
            DocumentModel.owner_id == owner_id,
            order_column=DocumentModel.created_at,
            limit=limit,
        )

    async def count_by_owner(self, session: AsyncSession, owner_id: str) -> int:
        return await self.count(session, DocumentModel.owner_id == owner_id)


class SummaryCRUD(BaseCRUD[SummaryModel]):
    """CRUD operations for SummaryModel."""

    def __init__(self) -> None:
        """Initialize SummaryCRUD with SummaryModel."""
        super().__init__(SummaryModel)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[SummaryModel]:
        """
        Retrieve all summaries of a document, newest first.

        Args:
            session: Async database session
            document_id: Document UUID

        Returns:
            Sequence of SummaryModels
        """
        return await self.get_recent(
            session,
            SummaryModel.document_id == document_id,
            order_column=SummaryModel.created_at,
        )

    async def set_narration_ref(
        self,
        session: AsyncSession,
        id: UUID,
        narration_ref: str,
    ) -> SummaryModel | None:
        """
        Attach a narration audio reference to a summary.

        Args:
            session: Async database session
            id: Summary UUID
            narration_ref: Audio storage reference

        Returns:
            Updated SummaryModel if found, None otherwise
        """
        return await self.update_by_id(session, id, narration_ref=narration_ref)


document_crud = DocumentCRUD()
summary_crud = SummaryCRUD()
