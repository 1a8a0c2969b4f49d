"""
Conversation CRUD operations.

Dependencies: sqlalchemy, studycast.boundary.db.models
System role: Conversation persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studycast.boundary.db.CRUD.base_crud import BaseCRUD
from studycast.boundary.db.models.conversation_model import ConversationModel


class ConversationCRUD(BaseCRUD[ConversationModel]):
    """CRUD operations for ConversationModel."""

    def __init__(self) -> None:
        """Initialize ConversationCRUD with ConversationModel."""
        super().__init__(ConversationModel)

    async def get_latest_for_pair(
        self,
        session: AsyncSession,
        document_id: UUID,
        user_id: str,
    ) -> ConversationModel | None:
        """
        Retrieve the newest conversation a user has about a document.

        Args:
            session: Async database session
            document_id: Document UUID
            user_id: User identifier

        Returns:
            ConversationModel if one exists, None otherwise
        """
        conversations = await self.get_recent(
            session,
            ConversationModel.document_id == document_id,
            ConversationModel.user_id == user_id,
            order_column=ConversationModel.created_at,
            limit=1,
        )
        return conversations[0] if conversations else None

    async def get_recent_by_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int | None = None,
    ) -> Sequence[ConversationModel]:
        """
        Retrieve a user's conversations, most recently active first.

        Args:
            session: Async database session
            user_id: User identifier
            limit: Maximum number of conversations to return

        Returns:
            Sequence of ConversationModels
        """
        return await self.get_recent(
            session,
            ConversationModel.user_id == user_id,
            order_column=ConversationModel.updated_at,
            limit=limit,
        )

    async def replace_messages(
        self,
        session: AsyncSession,
        id: UUID,
        messages: list[dict],
        updated_at: datetime,
    ) -> ConversationModel | None:
        """
        Overwrite the stored message list in one write.

        Args:
            session: Async database session
            id: Conversation UUID
            messages: Full serialized message list in append order
            updated_at: Timestamp of the completed turn

        Returns:
            Updated ConversationModel if found, None otherwise
        """
        return await self.update_by_id(
            session,
            id,
            messages=messages,
            updated_at=updated_at,
        )


conversation_crud = ConversationCRUD()
