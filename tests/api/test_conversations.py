"""
Tests for the conversation endpoints.
"""

import uuid
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from studycast.core.exceptions import ConversationError
from studycast.models.document import Document


def open_conversation(client: TestClient, document: Document) -> str:
    response = client.post(
        "/api/v1/conversations",
        json={"document_id": str(document.id), "user_id": "user-1"},
    )
    assert response.status_code == 200
    return response.json()["id"]


def test_send_message_returns_reply_and_grows_history(
    client: TestClient, seeded_document: Document
):
    conversation_id = open_conversation(client, seeded_document)

    reply = client.post(
        f"/api/v1/conversations/{conversation_id}/messages",
        json={"text": "What is chlorophyll?"},
    )

    assert reply.status_code == 200
    assert reply.json()["role"] == "assistant"
    history = client.get(f"/api/v1/conversations/{conversation_id}").json()
    assert history["total"] == 2
    assert [m["role"] for m in history["messages"]] == ["user", "assistant"]


def test_open_twice_returns_same_conversation(client: TestClient, seeded_document: Document):
    assert open_conversation(client, seeded_document) == open_conversation(client, seeded_document)


def test_blank_message_returns_400(client: TestClient, seeded_document: Document):
    conversation_id = open_conversation(client, seeded_document)

    response = client.post(f"/api/v1/conversations/{conversation_id}/messages", json={"text": "  "})

    assert response.status_code == 400


def test_model_failure_returns_502(
    client: TestClient, seeded_document: Document, mock_language_model: AsyncMock
):
    mock_language_model.converse.side_effect = ConversationError("model unavailable")
    conversation_id = open_conversation(client, seeded_document)

    response = client.post(f"/api/v1/conversations/{conversation_id}/messages", json={"text": "hi"})

    assert response.status_code == 502
    assert response.json()["detail"]["kind"] == "conversation_failed"
    pending = client.get(f"/api/v1/conversations/{conversation_id}").json()
    assert pending["total"] == 1


def test_unknown_conversation_returns_404(client: TestClient):
    response = client.get(f"/api/v1/conversations/{uuid.uuid4()}")

    assert response.status_code == 404
