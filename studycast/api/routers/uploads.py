"""
Upload API endpoints.

Routes: POST /uploads, GET /uploads, GET /uploads/{task_id},
DELETE /uploads/{task_id}

Dependencies: studycast.core.ingestion, studycast.models
System role: Upload submission and progress polling HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from studycast.api.deps import get_coordinator
from studycast.api.routers.error_handling import handle_domain_errors
from studycast.core.ingestion import IngestionCoordinator
from studycast.models.upload import (
    SourceFile,
    SubmitUploadsResponse,
    UploadTask,
    UploadTaskListResponse,
)

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("", response_model=SubmitUploadsResponse, status_code=status.HTTP_202_ACCEPTED)
@handle_domain_errors
async def submit_uploads(
    files: list[UploadFile] = File(...),
    owner_id: str = Form(...),
    coordinator: IngestionCoordinator = Depends(get_coordinator),
) -> SubmitUploadsResponse:
    """
    Submit a batch of study documents for processing.

    Each file runs through extraction, summarization and narration
    independently. Poll GET /uploads/{task_id} for progress.

    Raises:
        HTTPException(400): Empty batch, too many files, or a file empty or too large
    """
    # Reject on the declared part size before buffering any file
    for upload in files:
        if upload.size is not None:
            coordinator.check_file_size(upload.filename or "upload", upload.size)

    sources = [
        SourceFile(
            filename=upload.filename or "upload",
            content=await upload.read(),
            content_type=upload.content_type,
        )
        for upload in files
    ]
    return SubmitUploadsResponse(task_ids=coordinator.submit(sources, owner_id))


@router.get("", response_model=UploadTaskListResponse)
@handle_domain_errors
async def list_uploads(
    coordinator: IngestionCoordinator = Depends(get_coordinator),
) -> UploadTaskListResponse:
    """List every upload task in submission order."""
    tasks = coordinator.list_tasks()
    return UploadTaskListResponse(tasks=tasks, total=len(tasks))


@router.get("/{task_id}", response_model=UploadTask)
@handle_domain_errors
async def get_upload_status(
    task_id: UUID,
    coordinator: IngestionCoordinator = Depends(get_coordinator),
) -> UploadTask:
    """
    Get task status and progress for frontend polling.

    Progress is 25 while extracting, 50 while persisting, 75 while
    summarizing and narrating, and 100 when completed. A failed task keeps its
    last progress and reports error_kind and error_message.

    Raises:
        HTTPException(404): Unknown task id
    """
    return coordinator.status(task_id)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_domain_errors
async def forget_upload(
    task_id: UUID,
    coordinator: IngestionCoordinator = Depends(get_coordinator),
) -> Response:
    """
    Discard a finished task once the client no longer needs to poll it.

    Raises:
        HTTPException(404): Unknown task id
        HTTPException(409): Task still running
    """
    coordinator.forget(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
