"""
Quiz API endpoints.

Routes: POST /quizzes/sessions, GET /quizzes/sessions/{id},
POST /quizzes/sessions/{id}/answers, POST /quizzes/sessions/{id}/navigate,
POST /quizzes/sessions/{id}/complete, POST /quizzes/sessions/{id}/restart,
DELETE /quizzes/sessions/{id}, GET /quizzes/results/{user_id}

Dependencies: studycast.core.quiz, studycast.models
System role: Quiz session HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from studycast.api.deps import get_quiz_engine
from studycast.api.routers.error_handling import handle_domain_errors
from studycast.core.quiz import QuizEngine
from studycast.models.library import QuizResultListResponse
from studycast.models.quiz import (
    NavigateRequest,
    SelectAnswerRequest,
    StartQuizSessionRequest,
    QuizSessionResponse,
)

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.post("/sessions", response_model=QuizSessionResponse, status_code=status.HTTP_201_CREATED)
@handle_domain_errors
async def start_session(
    request: StartQuizSessionRequest,
    engine: QuizEngine = Depends(get_quiz_engine),
) -> QuizSessionResponse:
    """
    Open a quiz session for a document.

    Reuses the document's latest quiz or generates one.

    Raises:
        HTTPException(404): Document not found
        HTTPException(502): Quiz generation failed
    """
    session = await engine.start_session(request.document_id, request.user_id)
    return session.to_response()


@router.get("/sessions/{session_id}", response_model=QuizSessionResponse)
@handle_domain_errors
async def get_session(
    session_id: UUID,
    engine: QuizEngine = Depends(get_quiz_engine),
) -> QuizSessionResponse:
    """Get the current state of a quiz session."""
    return engine.get_session(session_id).to_response()


@router.post("/sessions/{session_id}/answers", response_model=QuizSessionResponse)
@handle_domain_errors
async def select_answer(
    session_id: UUID,
    request: SelectAnswerRequest,
    engine: QuizEngine = Depends(get_quiz_engine),
) -> QuizSessionResponse:
    """Select an option for a question."""
    session = engine.get_session(session_id)
    session.select_answer(request.question_id, request.option_index)
    return session.to_response()


@router.post("/sessions/{session_id}/navigate", response_model=QuizSessionResponse)
@handle_domain_errors
async def navigate(
    session_id: UUID,
    request: NavigateRequest,
    engine: QuizEngine = Depends(get_quiz_engine),
) -> QuizSessionResponse:
    """Move to the next or previous question."""
    session = engine.get_session(session_id)
    session.navigate(request.direction)
    return session.to_response()


@router.post("/sessions/{session_id}/complete", response_model=QuizSessionResponse)
@handle_domain_errors
async def complete(
    session_id: UUID,
    engine: QuizEngine = Depends(get_quiz_engine),
) -> QuizSessionResponse:
    """
    Score the session and record the attempt.

    Repeating the call returns the same attempt.
    """
    session = engine.get_session(session_id)
    await session.complete()
    return session.to_response()


@router.post(
    "/sessions/{session_id}/restart",
    response_model=QuizSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
@handle_domain_errors
async def restart(
    session_id: UUID,
    engine: QuizEngine = Depends(get_quiz_engine),
) -> QuizSessionResponse:
    """Start a new session on the same quiz."""
    return engine.restart_session(session_id).to_response()


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_domain_errors
async def close_session(
    session_id: UUID,
    engine: QuizEngine = Depends(get_quiz_engine),
) -> Response:
    """
    Discard a session the client is done with.

    Raises:
        HTTPException(404): Unknown session id
    """
    engine.close_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/results/{user_id}", response_model=QuizResultListResponse)
@handle_domain_errors
async def recent_results(
    user_id: str,
    limit: int = Query(default=10, ge=1, le=100),
    engine: QuizEngine = Depends(get_quiz_engine),
) -> QuizResultListResponse:
    """A user's most recent quiz attempts."""
    results = await engine.recent_results(user_id, limit)
    return QuizResultListResponse(results=results, total=len(results))
