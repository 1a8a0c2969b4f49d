"""
Conversation engine.

Turn-based dialogue about one document. The engine keeps the authoritative
in-memory message list per conversation and writes the full list to the
content store after each successful exchange.

A user message whose reply failed stays pending in memory. Sending the same
text again retries that turn instead of appending a duplicate.

Dependencies: asyncio, studycast.boundary.llm, studycast.boundary.store
System role: Document-grounded chat orchestration
"""

import asyncio
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from uuid import UUID

from studycast.boundary.llm import LanguageModelService
from studycast.boundary.store import ContentStore
from studycast.core.exceptions import (
    ConversationBusyError,
    ConversationError,
    ConversationNotFoundError,
    ConversationValidationError,
    NotFoundError,
    StorageError,
)
from studycast.models.common import utc_now
from studycast.models.conversation import ChatMessage, Conversation, MessageRole

logger = logging.getLogger(__name__)


@dataclass
class _ConversationState:
    conversation: Conversation
    context_text: str
    messages: list[ChatMessage]
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def pending(self) -> ChatMessage | None:
        """Trailing user message that has no reply yet."""
        if self.messages and self.messages[-1].role == MessageRole.USER:
            return self.messages[-1]
        return None


class ConversationEngine:
    """
    Owns the live state of every conversation it has loaded.

    One turn at a time per conversation: a send while another is in flight is
    rejected, not queued.

    At most max_loaded_conversations states are kept. The least recently used
    idle state is dropped past that; a dropped conversation reloads from the
    store on next use, losing only an unanswered user message.
    """

    def __init__(
        self,
        store: ContentStore,
        language_model: LanguageModelService,
        context_char_budget: int = 3000,
        max_loaded_conversations: int = 500,
    ) -> None:
        """
        Initialize conversation engine.

        Args:
            store: Content store for documents and conversations
            language_model: Reply generation backend
            context_char_budget: Document characters passed as context per turn
            max_loaded_conversations: Conversation states kept in memory
        """
        self.store = store
        self.language_model = language_model
        self.context_char_budget = context_char_budget
        self.max_loaded_conversations = max_loaded_conversations
        self._states: OrderedDict[UUID, _ConversationState] = OrderedDict()

    async def load_or_create(self, document_id: UUID, user_id: str) -> Conversation:
        """
        Most recent conversation for (document, user), or a new persisted one.

        Raises:
            NotFoundError: If the document does not exist
        """
        document = await self.store.get_document(document_id)
        if document is None:
            raise NotFoundError("document", document_id)

        conversation = await self.store.find_latest_conversation(document_id, user_id)
        if conversation is None:
            conversation = await self.store.create_conversation(
                Conversation(document_id=document_id, user_id=user_id)
            )
            logger.info(
                f"{__name__}:load_or_create - Conversation created",
                extra={"conversation_id": str(conversation.id), "document_id": str(document_id)},
            )

        state = self._remember(
            conversation.id,
            _ConversationState(
                conversation=conversation,
                context_text=document.extracted_text[: self.context_char_budget],
                messages=list(conversation.messages),
            ),
        )
        return self._view(state)

    async def get(self, conversation_id: UUID) -> Conversation:
        """
        Conversation with its in-memory message list.

        Raises:
            ConversationNotFoundError: If the conversation id is unknown
        """
        return self._view(await self._state(conversation_id))

    async def messages(self, conversation_id: UUID) -> list[ChatMessage]:
        """Current messages in order, including an unanswered user message."""
        state = await self._state(conversation_id)
        return list(state.messages)

    async def send_message(self, conversation_id: UUID, text: str) -> ChatMessage:
        """
        Run one exchange: user message in, assistant reply out.

        Args:
            conversation_id: Conversation to extend
            text: User message

        Returns:
            ChatMessage: The assistant reply

        Raises:
            ConversationValidationError: If text is blank
            ConversationNotFoundError: If the conversation id is unknown
            ConversationBusyError: If another turn is in flight
            ConversationError: If the reply failed or could not be persisted
        """
        if not text or not text.strip():
            raise ConversationValidationError("Message text must not be blank", field="text")

        state = await self._state(conversation_id)
        if state.lock.locked():
            raise ConversationBusyError(
                "A message is already being answered in this conversation",
                details={"conversation_id": str(conversation_id)},
            )

        async with state.lock:
            pending = state.pending
            if pending is None or pending.text != text:
                state.messages.append(ChatMessage(role=MessageRole.USER, text=text))

            try:
                reply_text = await self.language_model.converse(list(state.messages), state.context_text)
            except Exception as e:
                logger.warning(
                    f"{__name__}:send_message - Reply failed, user message kept pending",
                    extra={"conversation_id": str(conversation_id), "error_type": type(e).__name__},
                )
                if isinstance(e, ConversationError):
                    raise
                raise ConversationError(f"Assistant reply failed: {e}", conversation_id=conversation_id) from e

            reply = ChatMessage(role=MessageRole.ASSISTANT, text=reply_text)
            state.messages.append(reply)

            updated_at = utc_now()
            try:
                state.conversation = await self.store.save_conversation_messages(
                    conversation_id,
                    list(state.messages),
                    updated_at,
                )
            except StorageError as e:
                logger.error(
                    f"{__name__}:send_message - Messages not persisted: {e}",
                    extra={"conversation_id": str(conversation_id)},
                )
                raise ConversationError(
                    "Reply generated but the conversation could not be saved",
                    conversation_id=conversation_id,
                ) from e

            logger.info(
                f"{__name__}:send_message - Turn persisted",
                extra={"conversation_id": str(conversation_id), "message_count": len(state.messages)},
            )
            return reply

    def release(self, conversation_id: UUID) -> bool:
        """
        Drop a conversation's in-memory state. It reloads from the store on next use.

        Returns:
            bool: False when nothing was loaded or a turn is in flight
        """
        state = self._states.get(conversation_id)
        if state is None or state.lock.locked():
            return False
        del self._states[conversation_id]
        return True

    @property
    def loaded_count(self) -> int:
        return len(self._states)

    async def _state(self, conversation_id: UUID) -> _ConversationState:
        state = self._states.get(conversation_id)
        if state is not None:
            self._states.move_to_end(conversation_id)
            return state

        conversation = await self.store.get_conversation(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        document = await self.store.get_document(conversation.document_id)
        context_text = document.extracted_text[: self.context_char_budget] if document else ""

        return self._remember(
            conversation_id,
            _ConversationState(
                conversation=conversation,
                context_text=context_text,
                messages=list(conversation.messages),
            ),
        )

    def _remember(self, conversation_id: UUID, state: _ConversationState) -> _ConversationState:
        # Another coroutine may have loaded it while we awaited the store
        state = self._states.setdefault(conversation_id, state)
        self._states.move_to_end(conversation_id)

        idle = [cid for cid, s in self._states.items() if cid != conversation_id and not s.lock.locked()]
        for victim in idle[: max(0, len(self._states) - self.max_loaded_conversations)]:
            del self._states[victim]
            logger.debug(f"{__name__}:_remember - Released conversation {victim}")
        return state

    @staticmethod
    def _view(state: _ConversationState) -> Conversation:
        return state.conversation.model_copy(update={"messages": list(state.messages)})
