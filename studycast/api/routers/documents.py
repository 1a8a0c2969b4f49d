"""
Document library API endpoints.

Routes: GET /documents, GET /documents/{id}, GET /documents/{id}/summaries,
GET /dashboard/{user_id}

Dependencies: studycast.application.services.library_service, studycast.models
System role: Library and dashboard HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from studycast.api.deps import get_library_service
from studycast.api.routers.error_handling import handle_domain_errors
from studycast.application.services.library_service import LibraryService
from studycast.models.document import Document, DocumentListResponse, DocumentResponse
from studycast.models.library import DashboardResponse, SummaryListResponse

router = APIRouter(tags=["documents"])


@router.get("/documents", response_model=DocumentListResponse)
@handle_domain_errors
async def list_documents(
    owner_id: str = Query(..., min_length=1),
    limit: int = Query(default=5, ge=1, le=100),
    library: LibraryService = Depends(get_library_service),
) -> DocumentListResponse:
    """List an owner's most recent documents."""
    documents = await library.recent_documents(owner_id, limit)
    return DocumentListResponse(
        documents=[DocumentResponse.from_document(document) for document in documents],
        total=len(documents),
    )


@router.get("/documents/{document_id}", response_model=Document)
@handle_domain_errors
async def get_document(
    document_id: UUID,
    library: LibraryService = Depends(get_library_service),
) -> Document:
    """Get a document including its extracted text."""
    return await library.get_document(document_id)


@router.get("/documents/{document_id}/summaries", response_model=SummaryListResponse)
@handle_domain_errors
async def list_summaries(
    document_id: UUID,
    library: LibraryService = Depends(get_library_service),
) -> SummaryListResponse:
    """List a document's summaries with narration playback URLs."""
    summaries = await library.document_summaries(document_id)
    return SummaryListResponse(summaries=summaries, total=len(summaries))


@router.get("/dashboard/{user_id}", response_model=DashboardResponse)
@handle_domain_errors
async def get_dashboard(
    user_id: str,
    library: LibraryService = Depends(get_library_service),
) -> DashboardResponse:
    """Document count, quiz statistics and recent activity for a user."""
    return await library.dashboard(user_id)
