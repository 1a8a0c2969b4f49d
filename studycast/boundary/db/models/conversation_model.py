"""
Conversation ORM model.

The full message list is rewritten as one JSON value after every completed
turn, so a conversation row is always a consistent snapshot.

Dependencies: sqlalchemy, studycast.boundary.db.base
System role: Conversation persistence
"""

import uuid

from sqlalchemy import JSON, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from studycast.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ConversationModel(Base, UUIDMixin, TimestampMixin):
    """
    Conversation ORM model.

    Attributes:
        id: UUID primary key
        document_id: Document the conversation is grounded on
        user_id: Participating user
        messages: JSON list of messages in append order
        created_at: Insert timestamp (UTC)
        updated_at: Timestamp of the last persisted turn (UTC)
    """

    __tablename__ = "conversations"

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    messages: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
