"""
Dependency injection container.

Builds the long-lived service objects once per application and exposes them
to routers through FastAPI dependencies. The container lives on app.state;
there is no module-level singleton.

Dependencies: fastapi, studycast.configs, studycast.boundary, studycast.core
System role: DI container for service injection
"""

import logging

from fastapi import Request

from studycast.application.services.library_service import LibraryService
from studycast.boundary.extraction import TextExtractor, create_text_extractor
from studycast.boundary.llm import LanguageModelService, create_language_service
from studycast.boundary.speech import (
    AudioStorage,
    SpeechSynthesizer,
    get_audio_storage,
    get_speech_synthesizer,
)
from studycast.boundary.store import ContentStore, get_content_store
from studycast.configs import Settings, get_settings
from studycast.core.conversation import ConversationEngine
from studycast.core.ingestion import IngestionCoordinator, PipelineStageExecutor
from studycast.core.quiz import QuizEngine

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Container for the application's service instances."""

    def __init__(
        self,
        store: ContentStore,
        language_model: LanguageModelService,
        synthesizer: SpeechSynthesizer,
        audio_storage: AudioStorage,
        extractor: TextExtractor,
        settings: Settings | None = None,
    ) -> None:
        """
        Wire services from their collaborators.

        Args:
            store: Content store shared by every engine
            language_model: Summaries, quizzes and tutoring replies
            synthesizer: Narration audio
            audio_storage: Narration persistence
            extractor: Source file to text
            settings: Limits and tuning values (defaults to get_settings())
        """
        settings = settings or get_settings()
        self.store = store
        self.coordinator = IngestionCoordinator(
            PipelineStageExecutor(extractor, store, language_model, synthesizer, audio_storage),
            max_batch_size=settings.ingestion.max_batch_size,
            max_file_bytes=settings.ingestion.max_file_bytes,
            max_retained_tasks=settings.ingestion.max_retained_tasks,
        )
        self.quiz_engine = QuizEngine(
            store,
            language_model,
            question_count=settings.llm.quiz_question_count,
        )
        self.conversation_engine = ConversationEngine(
            store,
            language_model,
            context_char_budget=settings.llm.context_char_budget,
        )
        self.library_service = LibraryService(store, audio_storage)

    @classmethod
    async def from_settings(cls) -> "ServiceContainer":
        """Build every collaborator from environment configuration."""
        logger.info(f"{__name__}:from_settings - Building service container")
        return cls(
            store=await get_content_store(),
            language_model=create_language_service(),
            synthesizer=get_speech_synthesizer(),
            audio_storage=get_audio_storage(),
            extractor=create_text_extractor(),
        )

    async def close(self) -> None:
        """Stop running pipelines, then release the content store."""
        await self.coordinator.shutdown()
        await self.store.close()


def get_services(request: Request) -> ServiceContainer:
    """Get the container created by the application lifespan."""
    return request.app.state.services


def get_coordinator(request: Request) -> IngestionCoordinator:
    """Get the ingestion coordinator."""
    return get_services(request).coordinator


def get_quiz_engine(request: Request) -> QuizEngine:
    """Get the quiz engine."""
    return get_services(request).quiz_engine


def get_conversation_engine(request: Request) -> ConversationEngine:
    """Get the conversation engine."""
    return get_services(request).conversation_engine


def get_library_service(request: Request) -> LibraryService:
    """Get the library service."""
    return get_services(request).library_service
