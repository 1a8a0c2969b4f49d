"""
Document domain models and schemas.

Documents are written once by the ingestion pipeline and never mutated.
Summaries reference their document and gain a narration reference
after the narration stage.

Dependencies: pydantic
System role: Document and summary contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from studycast.models.common import utc_now


class Document(BaseModel):
    """Extracted source document (immutable)."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    owner_id: str = Field(description="Owner (user) identifier")
    title: str = Field(description="Display title, filename without extension")
    source_filename: str = Field(description="Original uploaded filename")
    extracted_text: str = Field(description="Plain text produced by the extractor")
    byte_size: int = Field(ge=0, description="Size of the uploaded file in bytes")
    created_at: datetime = Field(default_factory=utc_now)


class Summary(BaseModel):
    """Generated summary with optional narration audio reference."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    document_id: uuid.UUID
    text: str
    narration_ref: str | None = Field(
        default=None,
        description="Audio storage reference (s3:// URI or local path)",
    )
    created_at: datetime = Field(default_factory=utc_now)


class DocumentResponse(BaseModel):
    """Document listing entry without the extracted text body."""

    id: uuid.UUID
    owner_id: str
    title: str
    source_filename: str
    byte_size: int
    text_length: int
    created_at: datetime

    @classmethod
    def from_document(cls, document: Document) -> "DocumentResponse":
        """Build a listing entry from a Document."""
        return cls(
            id=document.id,
            owner_id=document.owner_id,
            title=document.title,
            source_filename=document.source_filename,
            byte_size=document.byte_size,
            text_length=len(document.extracted_text),
            created_at=document.created_at,
        )


class DocumentListResponse(BaseModel):
    """Document list response."""

    documents: list[DocumentResponse]
    total: int
