"""
Conversation domain models and schemas.

Message order is the list order; timestamps are display metadata only.

Dependencies: pydantic
System role: Conversation and chat message contracts
"""

import enum
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from studycast.models.common import utc_now


class MessageRole(str, enum.Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Single message in a conversation (immutable once appended)."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    role: MessageRole
    text: str
    timestamp: datetime = Field(default_factory=utc_now)


class Conversation(BaseModel):
    """Dialogue between one user and the assistant about one document."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    document_id: uuid.UUID
    user_id: str
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class OpenConversationRequest(BaseModel):
    """Request schema for loading or creating a conversation."""

    document_id: uuid.UUID
    user_id: str = Field(min_length=1)


class SendMessageRequest(BaseModel):
    """Request schema for one conversation turn."""

    text: str = Field(description="User question or message")


class ConversationResponse(BaseModel):
    """Conversation with its current message list."""

    id: uuid.UUID
    document_id: uuid.UUID
    user_id: str
    messages: list[ChatMessage]
    total: int = Field(description="Total number of messages")
