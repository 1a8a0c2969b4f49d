"""Document-grounded conversation engine."""

from studycast.core.conversation.conversation_engine import ConversationEngine

__all__ = ["ConversationEngine"]
