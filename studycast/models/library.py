"""
Library and dashboard response schemas.

Dependencies: pydantic
System role: Read-side contracts for the document library
"""

from pydantic import BaseModel, Field

from studycast.models.document import DocumentResponse, Summary
from studycast.models.quiz import QuizAttempt


class SummaryResponse(BaseModel):
    """Summary with a resolvable playback URL for its narration."""

    summary: Summary
    playback_url: str | None = Field(default=None, description="URL for narration audio")


class SummaryListResponse(BaseModel):
    """Summaries of one document, newest first."""

    summaries: list[SummaryResponse]
    total: int


class QuizResultListResponse(BaseModel):
    """A user's recent quiz attempts."""

    results: list[QuizAttempt]
    total: int


class DashboardResponse(BaseModel):
    """Per-user overview: counts, average score and recent activity."""

    user_id: str
    documents_count: int
    quizzes_count: int
    average_score: int = Field(ge=0, le=100)
    recent_documents: list[DocumentResponse]
    recent_results: list[QuizAttempt]
