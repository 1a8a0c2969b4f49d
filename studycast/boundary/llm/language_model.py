"""
Language model service.

Summaries, quiz payloads and tutoring replies over LangChain chat models.
Calls are stateless request/response; conversation state lives in the
conversation engine and is passed in on every call.

Dependencies: langchain_core, langchain_google_genai, studycast.configs
System role: Language model boundary
"""

import logging
from abc import ABC, abstractmethod

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate

from studycast.boundary.llm.prompts import QUIZ_PROMPT, SUMMARY_PROMPT, TUTOR_PROMPT
from studycast.core.exceptions import (
    ConversationError,
    QuizGenerationError,
    SummarizationError,
)
from studycast.models.conversation import ChatMessage, MessageRole

logger = logging.getLogger(__name__)


class LanguageModelService(ABC):
    """Language model operations used by the pipeline and engines."""

    @abstractmethod
    async def summarize(self, text: str) -> str:
        """
        Summarize document text.

        Raises:
            SummarizationError: If the model call fails or returns nothing
        """

    @abstractmethod
    async def generate_quiz(self, text: str, count: int) -> str:
        """
        Request a quiz payload for document text.

        Returns the raw model output; callers validate it against the quiz
        schema before trusting any of it.

        Raises:
            QuizGenerationError: If the model call fails
        """

    @abstractmethod
    async def converse(self, messages: list[ChatMessage], context_text: str) -> str:
        """
        Produce the assistant's next reply.

        Args:
            messages: Full prior dialogue in order, ending with the user's turn
            context_text: Document text already truncated to the context budget

        Raises:
            ConversationError: If the model call fails or returns nothing
        """


def message_text(message: BaseMessage) -> str:
    """
    Extract plain text from a chat model response.

    Gemini can return content as a list of typed blocks instead of a string.
    """
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def to_langchain_messages(messages: list[ChatMessage]) -> list[BaseMessage]:
    """Map dialogue messages onto LangChain message types, preserving order."""
    return [
        HumanMessage(content=m.text) if m.role == MessageRole.USER else AIMessage(content=m.text)
        for m in messages
    ]


class ChatModelLanguageService(LanguageModelService):
    """
    LanguageModelService backed by LangChain chat models.

    Separate model instances allow per-operation temperature and output caps
    (low temperature for summaries and quizzes, higher for tutoring).
    """

    def __init__(
        self,
        summary_model: BaseChatModel,
        quiz_model: BaseChatModel | None = None,
        chat_model: BaseChatModel | None = None,
    ) -> None:
        """
        Initialize language service.

        Args:
            summary_model: Model used for summaries (and the fallback for the others)
            quiz_model: Model used for quiz generation
            chat_model: Model used for tutoring replies
        """
        self._summary_model = summary_model
        self._quiz_model = quiz_model or summary_model
        self._chat_model = chat_model or summary_model

    async def _ainvoke(
        self,
        model: BaseChatModel,
        prompt: ChatPromptTemplate,
        variables: dict,
    ) -> str:
        messages = prompt.invoke(variables).to_messages()
        response = await model.ainvoke(messages)
        return message_text(response).strip()

    async def summarize(self, text: str) -> str:
        try:
            summary = await self._ainvoke(self._summary_model, SUMMARY_PROMPT, {"content": text})
        except Exception as e:
            logger.error(f"{__name__}:summarize - Model call failed: {type(e).__name__}: {e}")
            raise SummarizationError(f"Summary generation failed: {e}") from e

        if not summary:
            raise SummarizationError("Language model returned an empty summary")
        logger.info(f"{__name__}:summarize - Summary generated, len={len(summary)}")
        return summary

    async def generate_quiz(self, text: str, count: int) -> str:
        try:
            payload = await self._ainvoke(
                self._quiz_model,
                QUIZ_PROMPT,
                {"content": text, "count": count},
            )
        except Exception as e:
            logger.error(f"{__name__}:generate_quiz - Model call failed: {type(e).__name__}: {e}")
            raise QuizGenerationError(f"Quiz generation failed: {e}") from e

        logger.info(f"{__name__}:generate_quiz - Payload received, len={len(payload)}")
        return payload

    async def converse(self, messages: list[ChatMessage], context_text: str) -> str:
        try:
            reply = await self._ainvoke(
                self._chat_model,
                TUTOR_PROMPT,
                {"context": context_text, "history": to_langchain_messages(messages)},
            )
        except Exception as e:
            logger.error(f"{__name__}:converse - Model call failed: {type(e).__name__}: {e}")
            raise ConversationError(f"Assistant reply failed: {e}") from e

        if not reply:
            raise ConversationError("Language model returned an empty reply")
        return reply


def create_language_service() -> ChatModelLanguageService:
    """
    Build the Gemini-backed language service from settings.

    Returns:
        ChatModelLanguageService: Service with per-operation model instances
    """
    # Lazy import keeps the Google SDK out of test and memory-store startup
    from langchain_google_genai import ChatGoogleGenerativeAI

    from studycast.configs import get_settings

    config = get_settings().llm

    def build(temperature: float, max_tokens: int) -> BaseChatModel:
        return ChatGoogleGenerativeAI(
            model=config.model_id,
            temperature=temperature,
            max_output_tokens=max_tokens,
        )

    return ChatModelLanguageService(
        summary_model=build(config.summary_temperature, config.summary_max_tokens),
        quiz_model=build(config.quiz_temperature, config.quiz_max_tokens),
        chat_model=build(config.chat_temperature, config.chat_max_tokens),
    )
