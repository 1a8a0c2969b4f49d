"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory content store, collaborator mocks, sample entities
Dependencies: pytest, pytest-asyncio, unittest.mock
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock

import pytest

from studycast.boundary.extraction import TextExtractor
from studycast.boundary.llm import LanguageModelService
from studycast.boundary.speech import AudioStorage, SpeechSynthesizer
from studycast.boundary.store import InMemoryContentStore
from studycast.models.document import Document
from studycast.models.quiz import Quiz, QuizQuestion

SAMPLE_TEXT = (
    "Photosynthesis converts light energy into chemical energy. "
    "Chlorophyll in the chloroplasts absorbs mostly red and blue light. "
) * 20


@pytest.fixture
def memory_store() -> InMemoryContentStore:
    """Provide an empty in-memory content store."""
    return InMemoryContentStore()


@pytest.fixture
def mock_extractor() -> AsyncMock:
    """Provide mock text extractor returning sample text."""
    extractor = AsyncMock(spec=TextExtractor)
    extractor.extract.return_value = SAMPLE_TEXT
    return extractor


@pytest.fixture
def mock_language_model() -> AsyncMock:
    """Provide mock language model service."""
    service = AsyncMock(spec=LanguageModelService)
    service.summarize.return_value = "Plants turn light into sugar."
    service.converse.return_value = "Chlorophyll absorbs light."
    return service


@pytest.fixture
def mock_synthesizer() -> AsyncMock:
    """Provide mock speech synthesizer returning fake mp3 bytes."""
    synthesizer = AsyncMock(spec=SpeechSynthesizer)
    synthesizer.content_type = "audio/mpeg"
    synthesizer.synthesize.return_value = b"ID3fake-mp3-bytes"
    return synthesizer


@pytest.fixture
def mock_audio_storage() -> AsyncMock:
    """Provide mock audio storage returning an s3 reference."""
    storage = AsyncMock(spec=AudioStorage)
    storage.save.side_effect = lambda summary_id, audio, content_type: (
        f"s3://narrations/{summary_id}.mp3"
    )
    storage.playback_url = lambda ref: f"https://audio.example/{ref.rsplit('/', 1)[-1]}"
    return storage


@pytest.fixture
def sample_document() -> Document:
    """Provide a document that is not yet stored."""
    return Document(
        owner_id="user-1",
        title="photosynthesis",
        source_filename="photosynthesis.txt",
        extracted_text=SAMPLE_TEXT,
        byte_size=len(SAMPLE_TEXT),
    )


@pytest.fixture
async def stored_document(memory_store: InMemoryContentStore, sample_document: Document) -> Document:
    """Provide a document already saved in the memory store."""
    return await memory_store.create_document(sample_document)


def make_questions(count: int = 5) -> list[QuizQuestion]:
    """Questions whose correct option is always index 0."""
    return [
        QuizQuestion(
            id=str(index + 1),
            text=f"Question {index + 1}?",
            options=["right", "wrong a", "wrong b", "wrong c"],
            correct_option_index=0,
            explanation="The first option is right.",
        )
        for index in range(count)
    ]


@pytest.fixture
def sample_quiz(sample_document: Document) -> Quiz:
    """Provide a five-question quiz for the sample document."""
    return Quiz(
        document_id=sample_document.id,
        title="Quiz: photosynthesis",
        questions=make_questions(5),
    )
