"""
Conversation API endpoints.

Routes: POST /conversations, GET /conversations/{id},
POST /conversations/{id}/messages

Dependencies: studycast.core.conversation, studycast.models
System role: Document chat HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from studycast.api.deps import get_conversation_engine
from studycast.api.routers.error_handling import handle_domain_errors
from studycast.core.conversation import ConversationEngine
from studycast.models.conversation import (
    ChatMessage,
    Conversation,
    ConversationResponse,
    OpenConversationRequest,
    SendMessageRequest,
)

router = APIRouter(prefix="/conversations", tags=["conversations"])


def _to_response(conversation: Conversation) -> ConversationResponse:
    return ConversationResponse(
        id=conversation.id,
        document_id=conversation.document_id,
        user_id=conversation.user_id,
        messages=conversation.messages,
        total=len(conversation.messages),
    )


@router.post("", response_model=ConversationResponse)
@handle_domain_errors
async def open_conversation(
    request: OpenConversationRequest,
    engine: ConversationEngine = Depends(get_conversation_engine),
) -> ConversationResponse:
    """
    Load the latest conversation for a document and user, or start one.

    Raises:
        HTTPException(404): Document not found
    """
    conversation = await engine.load_or_create(request.document_id, request.user_id)
    return _to_response(conversation)


@router.get("/{conversation_id}", response_model=ConversationResponse)
@handle_domain_errors
async def get_conversation(
    conversation_id: UUID,
    engine: ConversationEngine = Depends(get_conversation_engine),
) -> ConversationResponse:
    """Get a conversation with its messages in order."""
    return _to_response(await engine.get(conversation_id))


@router.post("/{conversation_id}/messages", response_model=ChatMessage)
@handle_domain_errors
async def send_message(
    conversation_id: UUID,
    request: SendMessageRequest,
    engine: ConversationEngine = Depends(get_conversation_engine),
) -> ChatMessage:
    """
    Send a message and get the assistant's reply.

    Raises:
        HTTPException(400): Blank message
        HTTPException(404): Conversation not found
        HTTPException(409): Another message is still being answered
        HTTPException(502): Reply generation or persistence failed
    """
    return await engine.send_message(conversation_id, request.text)
