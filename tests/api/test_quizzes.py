"""
Tests for the quiz endpoints.
"""

import json
import uuid
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from studycast.models.document import Document


def quiz_payload() -> str:
    return json.dumps([
        {"id": str(i), "question": f"Q{i}?", "options": ["A", "B", "C", "D"], "correct_answer": 1}
        for i in range(1, 6)
    ])


@pytest.fixture
def session_id(
    client: TestClient, seeded_document: Document, mock_language_model: AsyncMock
) -> str:
    mock_language_model.generate_quiz.return_value = quiz_payload()
    response = client.post(
        "/api/v1/quizzes/sessions",
        json={"document_id": str(seeded_document.id), "user_id": "user-1"},
    )
    assert response.status_code == 201
    return response.json()["session_id"]


def test_start_session_returns_first_question(client: TestClient, session_id: str):
    response = client.get(f"/api/v1/quizzes/sessions/{session_id}")

    body = response.json()
    assert body["state"] == "answering"
    assert body["question_index"] == 0
    assert body["question_count"] == 5
    assert body["current_question"]["id"] == "1"
    assert "correct_option_index" not in body["current_question"]


def test_answer_navigate_and_complete(client: TestClient, session_id: str):
    base = f"/api/v1/quizzes/sessions/{session_id}"
    for question_id, option in (("1", 1), ("2", 1), ("3", 1), ("4", 0)):
        answer = {"question_id": question_id, "option_index": option}
        assert client.post(f"{base}/answers", json=answer).status_code == 200
    assert client.post(f"{base}/navigate", json={"direction": "next"}).json()["question_index"] == 1

    first = client.post(f"{base}/complete").json()
    second = client.post(f"{base}/complete").json()

    assert first["state"] == "completed"
    assert first["attempt"]["score"] == 60
    assert second["attempt"]["id"] == first["attempt"]["id"]

    results = client.get("/api/v1/quizzes/results/user-1").json()
    assert results["total"] == 1


def test_previous_at_first_question_returns_409(client: TestClient, session_id: str):
    response = client.post(
        f"/api/v1/quizzes/sessions/{session_id}/navigate",
        json={"direction": "previous"},
    )

    assert response.status_code == 409
    assert response.json()["detail"]["kind"] == "invalid_state"


def test_invalid_option_returns_409(client: TestClient, session_id: str):
    response = client.post(
        f"/api/v1/quizzes/sessions/{session_id}/answers",
        json={"question_id": "1", "option_index": 7},
    )

    assert response.status_code == 409


def test_restart_opens_new_session(client: TestClient, session_id: str):
    response = client.post(f"/api/v1/quizzes/sessions/{session_id}/restart")

    assert response.status_code == 201
    assert response.json()["session_id"] != session_id


def test_malformed_quiz_returns_502(
    client: TestClient, seeded_document: Document, mock_language_model: AsyncMock
):
    mock_language_model.generate_quiz.return_value = "not json"

    response = client.post(
        "/api/v1/quizzes/sessions",
        json={"document_id": str(seeded_document.id), "user_id": "user-1"},
    )

    assert response.status_code == 502
    assert response.json()["detail"]["kind"] == "quiz_generation_failed"


def test_unknown_document_returns_404(client: TestClient):
    response = client.post(
        "/api/v1/quizzes/sessions",
        json={"document_id": str(uuid.uuid4()), "user_id": "user-1"},
    )

    assert response.status_code == 404


def test_unknown_session_returns_404(client: TestClient):
    response = client.get(f"/api/v1/quizzes/sessions/{uuid.uuid4()}")

    assert response.status_code == 404


def test_close_session_returns_204(client: TestClient, session_id: str):
    response = client.delete(f"/api/v1/quizzes/sessions/{session_id}")

    assert response.status_code == 204
    assert client.get(f"/api/v1/quizzes/sessions/{session_id}").status_code == 404


def test_close_unknown_session_returns_404(client: TestClient):
    response = client.delete(f"/api/v1/quizzes/sessions/{uuid.uuid4()}")

    assert response.status_code == 404
