"""
API test fixtures.

Builds the application around a ServiceContainer whose collaborators are
mocks and an in-memory content store. Seeding goes through asyncio.run
because the TestClient drives the app on its own event loop.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from studycast.api.deps import ServiceContainer
from studycast.api.main import create_app
from studycast.boundary.store import InMemoryContentStore
from studycast.models.document import Document


@pytest.fixture
def services(
    memory_store: InMemoryContentStore,
    mock_language_model: AsyncMock,
    mock_synthesizer: AsyncMock,
    mock_audio_storage: AsyncMock,
    mock_extractor: AsyncMock,
) -> ServiceContainer:
    """Provide container wired to mocks."""
    return ServiceContainer(
        store=memory_store,
        language_model=mock_language_model,
        synthesizer=mock_synthesizer,
        audio_storage=mock_audio_storage,
        extractor=mock_extractor,
    )


@pytest.fixture
def client(services: ServiceContainer):
    """Provide test client for an app using the mocked container."""
    with TestClient(create_app(services)) as test_client:
        yield test_client


@pytest.fixture
def seeded_document(memory_store: InMemoryContentStore, sample_document: Document) -> Document:
    """Provide a document saved in the memory store before the test runs."""
    return asyncio.run(memory_store.create_document(sample_document))
